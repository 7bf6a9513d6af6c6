from __future__ import annotations

import logging
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Optional, Sequence

from .config import SolverConfig
from .machine import Machine
from .solve import solve
from .systems import NoSolutionError

logger = logging.getLogger(__name__)


def _solve_one(job) -> tuple[int, Optional[int]]:
    idx, machine, algebra, config = job
    return idx, solve(machine, algebra, config)


def solve_all(
    machines: Sequence[Machine],
    algebra: str,
    config: SolverConfig | None = None,
) -> list[Optional[int]]:
    """Per-machine costs in input order (None for infeasible machines)."""
    config = config or SolverConfig()
    jobs = [(i, m, algebra, config) for i, m in enumerate(machines)]
    costs: list[Optional[int]] = [None] * len(jobs)

    if config.workers <= 1 or len(jobs) <= 1:
        for job in jobs:
            i, cost = _solve_one(job)
            costs[i] = cost
        return costs

    ctx = mp.get_context("spawn")
    with ProcessPoolExecutor(max_workers=config.workers, mp_context=ctx) as ex:
        futures = [ex.submit(_solve_one, job) for job in jobs]
        for fut in as_completed(futures):
            i, cost = fut.result()
            costs[i] = cost
    return costs


def total_cost(
    machines: Sequence[Machine],
    algebra: str,
    config: SolverConfig | None = None,
) -> int:
    """Sum of per-machine minimum costs, applying the infeasibility policy."""
    config = config or SolverConfig()
    total = 0
    for i, cost in enumerate(solve_all(machines, algebra, config)):
        if cost is None:
            if config.on_infeasible == "raise":
                raise NoSolutionError(
                    f"machine {i} has no valid {algebra} press sequence: {machines[i]}"
                )
            logger.warning("skipping infeasible machine %d: %s", i, machines[i])
            continue
        total += cost
    return total
