from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

import numpy as np

from ..machine import Machine


class NoSolutionError(Exception):
    """Raised when a machine has no valid press sequence and that is fatal."""

    pass


@dataclass(frozen=True, eq=False)
class ReducedSystem:
    """RREF of an augmented system [A | b].

    Row i owns pivot column ``pivot_cols[i]``; rows past the rank have an
    all-zero coefficient block.
    """

    rows: np.ndarray
    rhs: np.ndarray
    pivot_cols: tuple[int, ...]
    pivot_row_of: dict[int, int] = field(default_factory=dict)

    @property
    def n_cols(self) -> int:
        return int(self.rows.shape[1])

    @property
    def rank(self) -> int:
        return len(self.pivot_cols)

    @property
    def free_cols(self) -> list[int]:
        pivots = set(self.pivot_cols)
        return [j for j in range(self.n_cols) if j not in pivots]

    @property
    def is_consistent(self) -> bool:
        # rows past the rank are zero, so any nonzero rhs there is 0 = c
        return not any(self.rhs[r] != 0 for r in range(self.rank, len(self.rhs)))

    def augmented(self) -> np.ndarray:
        return np.concatenate([self.rows, self.rhs.reshape(-1, 1)], axis=1)


class Algebra(Protocol):
    name: str

    def build(self, machine: Machine) -> tuple[np.ndarray, np.ndarray]: ...
    def reduce(self, A: np.ndarray, b: np.ndarray) -> ReducedSystem: ...
    def particular(self, system: ReducedSystem) -> Optional[np.ndarray]: ...
    def minimize(
        self, system: ReducedSystem, machine: Machine
    ) -> Optional[np.ndarray]: ...
    def cost(self, presses: np.ndarray) -> int: ...
