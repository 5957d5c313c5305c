"""Pipeline configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from sisterclade.config import PipelineConfig, default_workers
from sisterclade.errors import ConfigError


def test_defaults():
    cfg = PipelineConfig(analysis_dir="runs")
    assert cfg.analysis_dir == Path("runs")
    assert cfg.burnin == 200
    assert cfg.support_threshold == 0.95
    assert cfg.states_to_consider == (20, 6)
    assert cfg.n_workers == default_workers()
    assert cfg.n_workers >= 1
    assert cfg.validate() is cfg


@pytest.mark.parametrize(
    "changes",
    [
        {"burnin": -1},
        {"support_threshold": 0.0},
        {"support_threshold": 1.5},
        {"n_workers": 0},
        {"states_to_consider": ()},
        {"x_breaks": (1.0, 0.5)},
    ],
)
def test_invalid_values(changes):
    with pytest.raises(ConfigError):
        PipelineConfig(analysis_dir="runs").with_overrides(**changes)


def test_config_is_frozen():
    cfg = PipelineConfig(analysis_dir="runs")
    with pytest.raises(AttributeError):
        cfg.burnin = 10
