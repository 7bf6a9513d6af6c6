from __future__ import annotations

import logging
from fractions import Fraction
from typing import Optional, Sequence

import numpy as np

from ..machine import Machine
from ..numeric import (
    INTEGRALITY_TOLERANCE,
    PRUNE_TOLERANCE,
    as_exact_int,
    nearest_nonneg_int,
)
from .base import ReducedSystem

logger = logging.getLogger(__name__)


def build_counter_matrix(
    buttons: Sequence[Sequence[int]], joltage: Sequence[int]
) -> np.ndarray:
    """Return the augmented M x (N+1) matrix [A | b] for the counter model.
    A[j, i] = 1 if button i increments counter j; the last column holds the targets.
    """
    m, n = len(joltage), len(buttons)
    aug = np.zeros((m, n + 1), dtype=np.int64)
    for i, idx in enumerate(buttons):
        for j in idx:
            if not 0 <= j < m:
                raise ValueError(
                    f"button {i} increments counter {j}, but only {m} counters exist"
                )
            aug[j, i] = 1
    aug[:, n] = np.asarray(joltage, dtype=np.int64)
    return aug


def _to_fraction(v) -> Fraction:
    return v if isinstance(v, Fraction) else Fraction(int(v))


def rational_rref(aug: np.ndarray) -> ReducedSystem:
    """Gauss-Jordan elimination of [A|b] with exact Fraction entries."""
    m, width = aug.shape
    n = width - 1
    M = np.empty((m, width), dtype=object)
    for r in range(m):
        for c in range(width):
            M[r, c] = _to_fraction(aug[r, c])

    row = 0
    pivcols: list[int] = []
    pivot_row_of: dict[int, int] = {}
    for col in range(n):
        if row == m:
            break
        pivot = None
        for r in range(row, m):
            if M[r, col] != 0:
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        M[row, :] = M[row, :] / M[row, col]
        for r in range(m):
            if r != row and M[r, col] != 0:
                M[r, :] = M[r, :] - M[r, col] * M[row, :]
        pivcols.append(col)
        pivot_row_of[col] = row
        row += 1

    return ReducedSystem(
        rows=M[:, :n],
        rhs=M[:, n],
        pivot_cols=tuple(pivcols),
        pivot_row_of=pivot_row_of,
    )


def unique_solution(system: ReducedSystem) -> Optional[np.ndarray]:
    """Presses for a fully determined system, or None if any is fractional or negative."""
    if system.free_cols or not system.is_consistent:
        return None
    x = np.zeros(system.n_cols, dtype=np.int64)
    for col, ri in system.pivot_row_of.items():
        v = as_exact_int(system.rhs[ri])
        if v is None or v < 0:
            return None
        x[col] = v
    return x


def press_upper_bounds(A: np.ndarray, joltage: np.ndarray, cap: int) -> np.ndarray:
    """Per-button press bound: no button can be pressed more often than the
    smallest target among the counters it increments."""
    n = A.shape[1]
    ub = np.zeros(n, dtype=np.int64)
    for i in range(n):
        touched = np.flatnonzero(A[:, i])
        if len(touched):
            ub[i] = min(int(joltage[touched].min()), cap)
    return ub


class FreeVariableSearch:
    """Depth-first branch and bound over the free columns of a reduced system.

    Each pivot variable is ``rhs - coeffs @ free_values``; the residual of every
    pivot row is carried down the recursion and updated one free variable at a
    time. Leaves that pass the float check are re-validated on the integer
    system before they replace the incumbent.
    """

    def __init__(
        self,
        system: ReducedSystem,
        A: np.ndarray,
        joltage: np.ndarray,
        upper_bounds: np.ndarray,
        prune_tol: float = PRUNE_TOLERANCE,
        final_tol: float = INTEGRALITY_TOLERANCE,
    ):
        self.A = A
        self.joltage = joltage
        self.prune_tol = prune_tol
        self.final_tol = final_tol

        self.free = system.free_cols
        self.pivots = list(system.pivot_cols)
        rank, n_free = system.rank, len(self.free)

        self.coeffs = np.zeros((rank, n_free), dtype=np.float64)
        self.rhs = np.zeros(rank, dtype=np.float64)
        for ri in range(rank):
            self.rhs[ri] = float(system.rhs[ri])
            for k, f in enumerate(self.free):
                self.coeffs[ri, k] = float(system.rows[ri, f])

        # monotone[k, r]: row r only loses value from free variable k onward
        self.monotone = np.ones((n_free + 1, rank), dtype=bool)
        for k in reversed(range(n_free)):
            self.monotone[k] = self.monotone[k + 1] & (self.coeffs[:, k] >= 0)

        self.ub = np.asarray(upper_bounds, dtype=np.int64)[self.free]
        self.x = np.zeros(system.n_cols, dtype=np.int64)
        self.best_total: Optional[int] = None
        self.best_x: Optional[np.ndarray] = None
        self.nodes = 0

    def run(self) -> Optional[np.ndarray]:
        self._search(0, self.rhs.copy(), 0)
        logger.debug(
            "search: free=%d nodes=%d best=%s",
            len(self.free),
            self.nodes,
            self.best_total,
        )
        return self.best_x

    def _search(self, idx: int, residual: np.ndarray, partial: int) -> None:
        self.nodes += 1
        if idx == len(self.free):
            self._accept(residual, partial)
            return

        limit = int(self.ub[idx])
        if self.best_total is not None:
            limit = min(limit, self.best_total - partial - 1)
        col = self.coeffs[:, idx]
        watch = self.monotone[idx]
        f = self.free[idx]
        for v in range(limit + 1):
            res_v = residual - v * col
            if np.any(res_v[watch] < -self.prune_tol):
                break
            self.x[f] = v
            self._search(idx + 1, res_v, partial + v)
            if self.best_total is not None and partial + v + 1 >= self.best_total:
                break
        self.x[f] = 0

    def _accept(self, residual: np.ndarray, partial: int) -> None:
        vals = nearest_nonneg_int(residual, self.final_tol)
        if vals is None:
            return
        total = partial + int(vals.sum())
        if self.best_total is not None and total >= self.best_total:
            return
        x = self.x.copy()
        x[self.pivots] = vals
        if not np.array_equal(self.A @ x, self.joltage):
            logger.debug("search: float leaf %s failed exact check", x.tolist())
            return
        self.best_total, self.best_x = total, x


class RealAlgebra:
    """Counter model: presses increment counters, cost is the total press count."""

    name = "integer"

    def __init__(
        self,
        prune_tolerance: float = PRUNE_TOLERANCE,
        integrality_tolerance: float = INTEGRALITY_TOLERANCE,
        bound: str = "structural",
    ):
        if bound not in ("structural", "max_target"):
            raise ValueError(f"Unknown bound: {bound}")
        self.prune_tolerance = prune_tolerance
        self.integrality_tolerance = integrality_tolerance
        self.bound = bound

    def build(self, machine: Machine) -> tuple[np.ndarray, np.ndarray]:
        aug = build_counter_matrix(machine.buttons, machine.joltage)
        return aug[:, :-1], aug[:, -1]

    def reduce(self, A: np.ndarray, b: np.ndarray) -> ReducedSystem:
        return rational_rref(np.concatenate([A, b.reshape(-1, 1)], axis=1))

    def particular(self, system: ReducedSystem) -> Optional[np.ndarray]:
        return unique_solution(system)

    def upper_bounds(self, A: np.ndarray, b: np.ndarray) -> np.ndarray:
        max_target = int(b.max()) if len(b) else 0
        if self.bound == "max_target":
            return np.full(A.shape[1], max_target, dtype=np.int64)
        return press_upper_bounds(A, b, max_target)

    def minimize(
        self, system: ReducedSystem, machine: Machine
    ) -> Optional[np.ndarray]:
        logger.debug(
            "integer: rank=%d free=%d buttons=%d",
            system.rank,
            len(system.free_cols),
            system.n_cols,
        )
        if not system.is_consistent:
            return None
        if not system.free_cols:
            return unique_solution(system)
        A, b = self.build(machine)
        search = FreeVariableSearch(
            system,
            A,
            b,
            self.upper_bounds(A, b),
            prune_tol=self.prune_tolerance,
            final_tol=self.integrality_tolerance,
        )
        return search.run()

    def cost(self, presses: np.ndarray) -> int:
        return int(np.sum(presses))
