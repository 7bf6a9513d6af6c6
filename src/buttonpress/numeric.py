from __future__ import annotations

from fractions import Fraction
from typing import Optional

import numpy as np

# Coarse bound used while a branch is still open.
PRUNE_TOLERANCE = 1e-4
# Leaf acceptance; leaves are re-checked exactly afterwards.
INTEGRALITY_TOLERANCE = 1e-6


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def highest_bit(mask: int) -> int:
    """Index of the highest set bit, or -1 for 0."""
    return mask.bit_length() - 1


def mask_to_indices(mask: int) -> list[int]:
    out = []
    i = 0
    while mask:
        if mask & 1:
            out.append(i)
        mask >>= 1
        i += 1
    return out


def as_exact_int(value) -> Optional[int]:
    """Return ``value`` as an int if it is exactly integral, else None."""
    if isinstance(value, Fraction):
        return int(value) if value.denominator == 1 else None
    if isinstance(value, (int, np.integer)):
        return int(value)
    return None


def nearest_nonneg_int(
    values: np.ndarray, tol: float = INTEGRALITY_TOLERANCE
) -> Optional[np.ndarray]:
    """Round ``values`` to integers; None if any entry is off-grid or negative."""
    rounded = np.rint(values)
    if np.any(np.abs(values - rounded) > tol):
        return None
    if np.any(rounded < 0):
        return None
    return rounded.astype(np.int64)
