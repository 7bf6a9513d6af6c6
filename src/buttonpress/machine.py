from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from .numeric import highest_bit, mask_to_indices, popcount


class Machine:
    """One puzzle machine: a light pattern, its buttons and counter targets.

    The same button index lists serve both views: as toggle masks over the
    lights and as increment sets over the joltage counters.
    """

    def __init__(
        self,
        target: int,
        buttons: Iterable[Iterable[int]],
        joltage: Iterable[int] = (),
        n_lights: Optional[int] = None,
    ):
        self.buttons = tuple(frozenset(int(i) for i in b) for b in buttons)
        self.joltage = tuple(int(j) for j in joltage)
        self.target = int(target)

        if self.target < 0:
            raise ValueError("target mask must be non-negative")
        for b, idx in enumerate(self.buttons):
            if any(i < 0 for i in idx):
                raise ValueError(f"button {b} references a negative index")
        if any(j < 0 for j in self.joltage):
            raise ValueError("joltage targets must be non-negative")

        # Lights referenced past n_lights still exist, with target 0.
        top = highest_bit(self.target)
        for idx in self.buttons:
            if idx:
                top = max(top, max(idx))
        self.n_lights = max(top + 1, int(n_lights or 0))

    @classmethod
    def from_masks(cls, target: int, masks: Sequence[int], **kwargs) -> "Machine":
        return cls(target, [mask_to_indices(m) for m in masks], **kwargs)

    @property
    def n_buttons(self) -> int:
        return len(self.buttons)

    @property
    def n_counters(self) -> int:
        return len(self.joltage)

    @property
    def toggle_masks(self) -> list[int]:
        masks = []
        for idx in self.buttons:
            m = 0
            for i in idx:
                m |= 1 << i
            masks.append(m)
        return masks

    def apply_toggles(self, presses: Sequence[int]) -> int:
        """Light mask reached from all-off by pressing each button presses[i] times."""
        state = 0
        for mask, k in zip(self.toggle_masks, presses):
            if int(k) % 2:
                state ^= mask
        return state

    def apply_increments(self, presses: Sequence[int]) -> tuple[int, ...]:
        counters = np.zeros(self.n_counters, dtype=np.int64)
        for idx, k in zip(self.buttons, presses):
            for j in idx:
                if j < self.n_counters:
                    counters[j] += int(k)
        return tuple(int(c) for c in counters)

    def __repr__(self):
        return (
            f"Machine(lights={self.n_lights}, on={popcount(self.target)}, "
            f"buttons={self.n_buttons}, "
            f"counters={self.n_counters})"
        )

    def __str__(self) -> str:
        lights = "".join(
            "#" if (self.target >> j) & 1 else "." for j in range(self.n_lights)
        )
        btns = " ".join(
            "(" + ",".join(str(i) for i in sorted(b)) + ")" for b in self.buttons
        )
        jolt = ",".join(str(j) for j in self.joltage)
        return f"[{lights}] {btns} {{{jolt}}}"
