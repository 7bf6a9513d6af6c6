from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..machine import Machine
from .base import ReducedSystem

logger = logging.getLogger(__name__)


def build_gf2_matrix(masks: Sequence[int], n_lights: int) -> np.ndarray:
    """Return the L x N effect matrix over GF(2).
    Column i encodes the lights toggled when pressing button i.
    """
    A = np.zeros((n_lights, len(masks)), dtype=np.uint8)
    for i, mask in enumerate(masks):
        for j in range(n_lights):
            if (mask >> j) & 1:
                A[j, i] = 1
    return A


def target_vector(target: int, n_lights: int) -> np.ndarray:
    return np.array([(target >> j) & 1 for j in range(n_lights)], dtype=np.uint8)


def gf2_rref(A: np.ndarray, b: np.ndarray) -> ReducedSystem:
    """Reduce [A|b] over GF(2) to RREF (Gauss-Jordan, XOR row operations)."""
    A = (A % 2).astype(np.uint8)
    b = (b % 2).astype(np.uint8).reshape(-1, 1)
    m, n = A.shape
    M = np.concatenate([A.copy(), b.copy()], axis=1)  # shape (m, n+1)

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        pivot = None
        for r in range(row, m):
            if M[r, col]:
                pivot = r
                break
        if pivot is None:
            continue
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # eliminate ALL other rows, not just those below
        for r in range(m):
            if r != row and M[r, col]:
                M[r, :] ^= M[row, :]
        pivcols.append(col)
        row += 1

    return ReducedSystem(
        rows=M[:, :n],
        rhs=M[:, n],
        pivot_cols=tuple(pivcols),
        pivot_row_of={c: i for i, c in enumerate(pivcols)},
    )


def gf2_particular(system: ReducedSystem) -> Optional[np.ndarray]:
    """Pivot bits read from the rhs, free bits 0. None if inconsistent."""
    if not system.is_consistent:
        return None
    x0 = np.zeros((system.n_cols,), dtype=np.uint8)
    for ri, pc in enumerate(system.pivot_cols):
        x0[pc] = system.rhs[ri]
    return x0


def gf2_kernel_basis(system: ReducedSystem) -> List[np.ndarray]:
    """Nullspace basis of the reduced coefficient block, one vector per free column."""
    basis: list[np.ndarray] = []
    for f in system.free_cols:
        v = np.zeros((system.n_cols,), dtype=np.uint8)
        v[f] = 1
        for ri, pc in enumerate(system.pivot_cols):
            v[pc] = system.rows[ri, f]
        basis.append(v)
    return basis


def gf2_min_weight(
    x0: np.ndarray, basis: Sequence[np.ndarray]
) -> Tuple[np.ndarray, int]:
    """Minimum-Hamming-weight vector of x0 + span(basis).

    Walks all 2^k combinations in Gray-code order so each step is one XOR.
    """
    best = x0.copy()
    best_w = int(best.sum())
    cand = x0.copy()
    k = len(basis)
    for i in range(1, 1 << k):
        # bit flipped between gray(i-1) and gray(i)
        cand ^= basis[(i & -i).bit_length() - 1]
        w = int(cand.sum())
        if w < best_w:
            best, best_w = cand.copy(), w
    return best, best_w


class GF2Algebra:
    """Toggle model: presses XOR lights, cost is the number of buttons pressed."""

    name = "gf2"

    def build(self, machine: Machine) -> tuple[np.ndarray, np.ndarray]:
        A = build_gf2_matrix(machine.toggle_masks, machine.n_lights)
        return A, target_vector(machine.target, machine.n_lights)

    def reduce(self, A: np.ndarray, b: np.ndarray) -> ReducedSystem:
        return gf2_rref(A, b)

    def particular(self, system: ReducedSystem) -> Optional[np.ndarray]:
        return gf2_particular(system)

    def minimize(
        self, system: ReducedSystem, machine: Machine
    ) -> Optional[np.ndarray]:
        x0 = gf2_particular(system)
        if x0 is None:
            return None
        basis = gf2_kernel_basis(system)
        logger.debug(
            "gf2: rank=%d kernel_dim=%d buttons=%d",
            system.rank,
            len(basis),
            system.n_cols,
        )
        best, _ = gf2_min_weight(x0, basis)
        return best

    def cost(self, presses: np.ndarray) -> int:
        return int(np.count_nonzero(presses))
