"""Run configuration passed explicitly to every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path

from .errors import ConfigError

DEFAULT_BURNIN = 200
DEFAULT_SUPPORT_THRESHOLD = 0.95
DEFAULT_STATES = (20, 6)
DEFAULT_X_BREAKS = (0.0, 0.25, 0.5, 0.75, 1.0)
DEFAULT_REFERENCE_DATASET = "Whelan_D20"


def default_workers() -> int:
    """Available parallelism minus one, never below one."""
    return max(1, (os.cpu_count() or 1) - 1)


@dataclass(frozen=True)
class PipelineConfig:
    analysis_dir: Path
    burnin: int = DEFAULT_BURNIN
    support_threshold: float = DEFAULT_SUPPORT_THRESHOLD
    n_workers: int = field(default_factory=default_workers)
    states_to_consider: tuple[int, ...] = DEFAULT_STATES
    x_breaks: tuple[float, ...] = DEFAULT_X_BREAKS
    summary_path: Path | None = None
    reference_dataset: str = DEFAULT_REFERENCE_DATASET

    def __post_init__(self) -> None:
        object.__setattr__(self, "analysis_dir", Path(self.analysis_dir))
        if self.summary_path is not None:
            object.__setattr__(self, "summary_path", Path(self.summary_path))
        object.__setattr__(self, "states_to_consider", tuple(int(s) for s in self.states_to_consider))
        object.__setattr__(self, "x_breaks", tuple(float(x) for x in self.x_breaks))

    def validate(self) -> "PipelineConfig":
        if self.burnin < 0:
            raise ConfigError("burnin must be >= 0")
        if not 0.0 < self.support_threshold <= 1.0:
            raise ConfigError("support_threshold must be in (0, 1]")
        if self.n_workers < 1:
            raise ConfigError("n_workers must be >= 1")
        if not self.states_to_consider:
            raise ConfigError("states_to_consider cannot be empty")
        if any(s <= 0 for s in self.states_to_consider):
            raise ConfigError("states_to_consider values must be > 0")
        if list(self.x_breaks) != sorted(self.x_breaks):
            raise ConfigError("x_breaks must be increasing")
        return self

    def with_overrides(self, **changes) -> "PipelineConfig":
        return replace(self, **changes).validate()
