from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .numeric import INTEGRALITY_TOLERANCE, PRUNE_TOLERANCE


@dataclass
class SolverConfig:
    prune_tolerance: float = PRUNE_TOLERANCE
    integrality_tolerance: float = INTEGRALITY_TOLERANCE
    bound: str = "structural"  # or "max_target"
    workers: int = 1
    on_infeasible: str = "raise"  # or "skip"

    def __post_init__(self):
        self.prune_tolerance = float(self.prune_tolerance)
        self.integrality_tolerance = float(self.integrality_tolerance)
        self.workers = int(self.workers)
        if self.integrality_tolerance <= 0 or self.prune_tolerance <= 0:
            raise ValueError("tolerances must be positive")
        if self.integrality_tolerance > self.prune_tolerance:
            raise ValueError(
                "integrality_tolerance must not exceed prune_tolerance"
            )
        if self.bound not in ("structural", "max_target"):
            raise ValueError(f"Unknown bound: {self.bound}")
        if self.on_infeasible not in ("raise", "skip"):
            raise ValueError(f"Unknown on_infeasible policy: {self.on_infeasible}")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

    @classmethod
    def from_dict(cls, d: dict | None) -> "SolverConfig":
        d = dict(d or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown solver config keys: {unknown}")
        return cls(**d)


def load_config(path: str | Path) -> SolverConfig:
    """Read the ``solver:`` section of a YAML config file."""
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    return SolverConfig.from_dict(cfg.get("solver"))
