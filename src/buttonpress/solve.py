from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .config import SolverConfig
from .machine import Machine
from .systems import Algebra, GF2Algebra, RealAlgebra


def get_algebra(
    name: Union[str, Algebra], config: SolverConfig | None = None
) -> Algebra:
    if not isinstance(name, str):
        return name
    cfg = config or SolverConfig()
    key = name.lower()
    if key in ("gf2", "lights"):
        return GF2Algebra()
    if key in ("integer", "joltage"):
        return RealAlgebra(
            prune_tolerance=cfg.prune_tolerance,
            integrality_tolerance=cfg.integrality_tolerance,
            bound=cfg.bound,
        )
    raise ValueError(f"Unknown algebra: {name}")


def solve_presses(
    machine: Machine,
    algebra: Union[str, Algebra],
    config: SolverConfig | None = None,
) -> Optional[np.ndarray]:
    """Minimum-cost press vector for ``machine``, or None if none exists."""
    alg = get_algebra(algebra, config)
    A, b = alg.build(machine)
    system = alg.reduce(A, b)
    return alg.minimize(system, machine)


def solve(
    machine: Machine,
    algebra: Union[str, Algebra],
    config: SolverConfig | None = None,
) -> Optional[int]:
    alg = get_algebra(algebra, config)
    presses = solve_presses(machine, alg)
    if presses is None:
        return None
    return alg.cost(presses)


def min_weight_gf2(target: int, buttons: Sequence[int]) -> Optional[int]:
    """Fewest presses that XOR ``buttons`` (bit masks) into ``target``."""
    return solve(Machine.from_masks(target, buttons), "gf2")


def min_sum_integer_presses(
    counter_incidence: Sequence[Iterable[int]], joltage_targets: Sequence[int]
) -> Optional[int]:
    """Fewest total presses that raise every counter exactly to its target."""
    return solve(Machine(0, counter_incidence, joltage_targets), "integer")
