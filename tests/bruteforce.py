"""Exhaustive reference solvers and random machine generators for tests."""

import itertools

import numpy as np

from buttonpress import Machine


def brute_force_gf2(machine: Machine):
    best = None
    for bits in itertools.product((0, 1), repeat=machine.n_buttons):
        if machine.apply_toggles(bits) == machine.target:
            w = sum(bits)
            if best is None or w < best:
                best = w
    return best


def brute_force_counters(machine: Machine):
    ranges = []
    for idx in machine.buttons:
        hi = min((machine.joltage[j] for j in idx), default=0)
        ranges.append(range(hi + 1))
    best = None
    for presses in itertools.product(*ranges):
        if machine.apply_increments(presses) == machine.joltage:
            s = sum(presses)
            if best is None or s < best:
                best = s
    return best


def random_gf2_machine(rng: np.random.Generator, n_lights=4, n_buttons=6):
    masks = [int(rng.integers(1, 1 << n_lights)) for _ in range(n_buttons)]
    target = int(rng.integers(0, 1 << n_lights))
    return Machine.from_masks(target, masks, n_lights=n_lights)


def random_counter_machine(rng: np.random.Generator, n_counters=3, n_buttons=4):
    buttons = []
    for _ in range(n_buttons):
        idx = [j for j in range(n_counters) if rng.random() < 0.5]
        if not idx:
            idx = [int(rng.integers(n_counters))]
        buttons.append(idx)
    presses = rng.integers(0, 3, size=n_buttons)
    joltage = [0] * n_counters
    for idx, k in zip(buttons, presses):
        for j in idx:
            joltage[j] += int(k)
    return Machine(0, buttons, joltage)
