from __future__ import annotations

import re

from .machine import Machine

_TOKEN = re.compile(r"\[[.#]*\]|\([\d,\s]*\)|\{[\d,\s]*\}|\S+")


def _int_list(token: str) -> list[int]:
    inner = token[1:-1].strip()
    if not inner:
        return []
    try:
        return [int(p) for p in inner.split(",")]
    except ValueError:
        raise ValueError(f"bad integer list: {token!r}") from None


def parse_line(line: str) -> Machine:
    """Parse ``[.##.] (3) (1,3) ... {3,5,4,7}`` into a Machine."""
    tokens = _TOKEN.findall(line.strip())
    if not tokens or not tokens[0].startswith("["):
        raise ValueError(f"missing light pattern in line: {line!r}")

    pattern = tokens[0][1:-1]
    target = 0
    for j, c in enumerate(pattern):
        if c == "#":
            target |= 1 << j

    buttons = []
    joltage: list[int] = []
    seen_joltage = False
    for tok in tokens[1:]:
        if tok.startswith("(") and not seen_joltage:
            buttons.append(_int_list(tok))
        elif tok.startswith("{") and not seen_joltage:
            joltage = _int_list(tok)
            seen_joltage = True
        else:
            raise ValueError(f"unexpected token {tok!r} in line: {line!r}")

    return Machine(target, buttons, joltage, n_lights=len(pattern))


def parse_machines(text: str) -> list[Machine]:
    return [parse_line(ln) for ln in text.splitlines() if ln.strip()]
