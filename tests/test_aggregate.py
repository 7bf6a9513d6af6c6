import logging

import pytest

from buttonpress import (
    Machine,
    NoSolutionError,
    SolverConfig,
    get_algebra,
    parse_machines,
    solve,
    solve_all,
    total_cost,
)


def test_example_totals(example_text):
    machines = parse_machines(example_text)
    assert solve_all(machines, "gf2") == [2, 3, 2]
    assert total_cost(machines, "gf2") == 7
    assert solve_all(machines, "integer") == [10, 12, 11]
    assert total_cost(machines, "integer") == 33


def test_worker_pool_gives_same_total(example_text):
    machines = parse_machines(example_text)
    cfg = SolverConfig(workers=2)
    assert total_cost(machines, "integer", cfg) == 33


def test_solve_has_no_state_between_calls(example_text):
    m = parse_machines(example_text)[1]
    assert [solve(m, "integer") for _ in range(3)] == [12, 12, 12]


def test_infeasible_machine_raises_by_default():
    machines = [
        Machine.from_masks(0b01, [0b01]),
        Machine.from_masks(0b01, [0b11]),
    ]
    with pytest.raises(NoSolutionError, match="machine 1"):
        total_cost(machines, "gf2")


def test_infeasible_machine_can_be_skipped(caplog):
    machines = [
        Machine.from_masks(0b01, [0b01]),
        Machine.from_masks(0b01, [0b11]),
    ]
    cfg = SolverConfig(on_infeasible="skip")
    with caplog.at_level(logging.WARNING, logger="buttonpress.aggregate"):
        assert total_cost(machines, "gf2", cfg) == 1
    assert "infeasible machine 1" in caplog.text


def test_get_algebra_aliases_and_errors():
    assert get_algebra("lights").name == "gf2"
    assert get_algebra("joltage").name == "integer"
    alg = get_algebra("gf2")
    assert get_algebra(alg) is alg
    with pytest.raises(ValueError):
        get_algebra("tropical")
