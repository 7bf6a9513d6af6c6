from pathlib import Path

import pytest

from buttonpress import SolverConfig, load_config

ROOT = Path(__file__).resolve().parents[1]


def test_default_config_file_loads():
    cfg = load_config(ROOT / "configs" / "default.yaml")
    assert cfg == SolverConfig()


def test_partial_config(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("solver:\n  workers: 4\n  on_infeasible: skip\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.workers == 4
    assert cfg.on_infeasible == "skip"
    assert cfg.bound == "structural"


def test_missing_section_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == SolverConfig()


@pytest.mark.parametrize(
    "section",
    [
        {"tolerance": 1e-3},
        {"bound": "loose"},
        {"on_infeasible": "ignore"},
        {"workers": 0},
        {"prune_tolerance": 1e-8, "integrality_tolerance": 1e-6},
    ],
)
def test_invalid_config_rejected(section):
    with pytest.raises(ValueError):
        SolverConfig.from_dict(section)
