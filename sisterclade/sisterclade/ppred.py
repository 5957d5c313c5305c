"""Posterior-predictive report parsing.

A report holds five test sections at fixed lines; the z-score of each test
sits three lines below its title::

    1   diversity test
    ...
    4   z-score : 2.31

The same five statistics go by different names in the report, in the
pre-tabulated summary table, in record fields and in figures.
`PPRED_STATISTICS` is the single place that ties them together; everything
else looks names up here.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from scipy.stats import norm

from .errors import NumericParseError, StructuralValidationError
from .filenames import PPRED_SUFFIX, parse_run_filename

logger = logging.getLogger(__name__)

Z_SCORE_OFFSET = 3
Z_SCORE_PREFIX = "z-score : "
Z_ADEQUACY_CUTOFF = 2.0


@dataclass(frozen=True)
class PPredStatistic:
    field: str
    title: str
    column: str
    display: str
    line: int  # 1-based line of the section title


PPRED_STATISTICS: Tuple[PPredStatistic, ...] = (
    PPredStatistic("ppa_div", "diversity test", "PPA_DIV", "Site diversity", 1),
    PPredStatistic("ppa_conv", "empirical convergence probability test", "PPA_CONV", "Convergence", 7),
    PPredStatistic(
        "ppa_var", "across-site compositional heterogeneity test", "PPA_VAR", "Site heterogeneity", 13
    ),
    PPredStatistic("ppa_max", "max heterogeneity across taxa", "PPA_MAX", "Max taxon heterogeneity", 21),
    PPredStatistic(
        "ppa_mean", "mean squared heterogeneity across taxa", "PPA_MEAN", "Mean taxon heterogeneity", 27
    ),
)

STATISTICS_BY_FIELD: Dict[str, PPredStatistic] = {s.field: s for s in PPRED_STATISTICS}


@dataclass(frozen=True)
class PPredReport:
    transform: str
    states: int
    ppa_div: float
    ppa_conv: float
    ppa_var: float
    ppa_max: float
    ppa_mean: float


def _line(lines: List[str], line_number: int) -> str | None:
    idx = line_number - 1
    if idx >= len(lines):
        return None
    return lines[idx].rstrip("\r\n")


def validate_headers(path: str | Path, lines: List[str]) -> None:
    for stat in PPRED_STATISTICS:
        found = _line(lines, stat.line)
        if found != stat.title:
            raise StructuralValidationError(str(path), stat.line, stat.title, found)


def _parse_zscore(path: str | Path, lines: List[str], stat: PPredStatistic) -> float:
    line_number = stat.line + Z_SCORE_OFFSET
    raw = _line(lines, line_number)
    if raw is None:
        raise NumericParseError(f"{path}: missing z-score line {line_number} for {stat.title!r}")
    if not raw.startswith(Z_SCORE_PREFIX):
        raise NumericParseError(f"{path}: line {line_number} is not a z-score line: {raw!r}")
    value = raw[len(Z_SCORE_PREFIX):].strip()
    try:
        return float(value)
    except ValueError as exc:
        raise NumericParseError(f"{path}: line {line_number} z-score not numeric: {value!r}") from exc


def parse_ppred(path: str | Path) -> PPredReport:
    label = parse_run_filename(path, suffix=PPRED_SUFFIX)
    with open(path, "r", encoding="utf-8") as handle:
        lines = handle.readlines()
    validate_headers(path, lines)
    values = {stat.field: _parse_zscore(path, lines, stat) for stat in PPRED_STATISTICS}
    logger.debug("%s: %s", Path(path).name, values)
    return PPredReport(transform=label.transform, states=label.states, **values)


def zscore_pvalue(z: float) -> float:
    """Two-sided normal tail probability of a posterior-predictive z-score."""
    return float(2.0 * norm.sf(abs(z)))


def is_adequate(z: float, cutoff: float = Z_ADEQUACY_CUTOFF) -> bool:
    return abs(z) <= cutoff
