"""Merge per-run outputs and reference values into one long-form table.

The normalized table has one row per (transform, states, statistic) with a
float `value`. `transform` and `statistic` are ordered categoricals so
figure legends and facets always come out in the same order.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from .errors import CategoryError
from .ppred import PPRED_STATISTICS, STATISTICS_BY_FIELD, PPredReport, is_adequate, zscore_pvalue
from .reference import (
    CANONICAL_TRANSFORM,
    PUBLISHED_LABEL,
    PUBLISHED_SUPPORT,
    RANDOM_PREFIX,
    REPRODUCED_LABEL,
    convergence_tier,
    published_support,
    summary_reference_rows,
)
from .support import TreeSupport
from .taxa import HYPOTHESES, HYPOTHESIS_NAMES

logger = logging.getLogger(__name__)

TRANSFORM_ORDER = (
    PUBLISHED_LABEL,
    REPRODUCED_LABEL,
    f"{RANDOM_PREFIX}00",
    f"{RANDOM_PREFIX}01",
    f"{RANDOM_PREFIX}02",
    f"{RANDOM_PREFIX}03",
)
SUPPORT_STATISTICS = (HYPOTHESIS_NAMES["porifera"], HYPOTHESIS_NAMES["ctenosis"])
PPRED_DISPLAY_NAMES = tuple(s.display for s in PPRED_STATISTICS)
STATISTIC_ORDER = SUPPORT_STATISTICS + PPRED_DISPLAY_NAMES
RECODING_ORDER = ("none", "SR6", "random")
CONVERGENCE_ORDER = ("good", "acceptable", "poor")

TRANSFORM_DTYPE = pd.CategoricalDtype(list(TRANSFORM_ORDER), ordered=True)
STATISTIC_DTYPE = pd.CategoricalDtype(list(STATISTIC_ORDER), ordered=True)
RECODING_DTYPE = pd.CategoricalDtype(list(RECODING_ORDER), ordered=True)
CONVERGENCE_DTYPE = pd.CategoricalDtype(list(CONVERGENCE_ORDER), ordered=True)

TABLE_COLUMNS = ("transform", "states", "statistic", "value")


def _statistic_aliases() -> Dict[str, str]:
    aliases: Dict[str, str] = {}
    for stat in PPRED_STATISTICS:
        for name in (stat.field, stat.title, stat.column, stat.display):
            aliases[name] = stat.display
    for key, display in HYPOTHESIS_NAMES.items():
        aliases[f"{key}_support"] = display
        aliases[display] = display
        aliases[display.replace("-", "_")] = display
    return aliases


STATISTIC_ALIASES = _statistic_aliases()


@dataclass(frozen=True)
class StatRecord:
    transform: str
    states: int
    statistic: str
    value: float


def relabel_transform(token: str) -> str:
    if token == CANONICAL_TRANSFORM:
        return REPRODUCED_LABEL
    return f"{RANDOM_PREFIX}{token}"


def relabel_transforms(tokens: Sequence[str]) -> List[str]:
    return [relabel_transform(t) for t in tokens]


def canonical_statistic(name: str) -> str:
    try:
        return STATISTIC_ALIASES[name]
    except KeyError:
        raise CategoryError(f"Unknown statistic name: {name!r}") from None


def support_records(records: Iterable[TreeSupport]) -> List[StatRecord]:
    out: List[StatRecord] = []
    for rec in records:
        transform = relabel_transform(rec.transform)
        out.append(StatRecord(transform, rec.states, HYPOTHESIS_NAMES["porifera"], rec.porifera_support))
        out.append(StatRecord(transform, rec.states, HYPOTHESIS_NAMES["ctenosis"], rec.ctenosis_support))
    return out


def ppred_records(reports: Iterable[PPredReport]) -> List[StatRecord]:
    out: List[StatRecord] = []
    for rep in reports:
        transform = relabel_transform(rep.transform)
        for field, stat in STATISTICS_BY_FIELD.items():
            out.append(StatRecord(transform, rep.states, stat.display, float(getattr(rep, field))))
    return out


def reference_records(summary: pd.DataFrame | None = None, dataset: str | None = None) -> List[StatRecord]:
    """Published support rows, plus published PP statistics from `summary`."""
    out: List[StatRecord] = []
    for states in sorted(PUBLISHED_SUPPORT, reverse=True):
        row = published_support(states)
        for key in HYPOTHESES:
            out.append(StatRecord(PUBLISHED_LABEL, states, HYPOTHESIS_NAMES[key], row[f"{key}_support"]))
    if summary is None:
        return out
    if dataset is None:
        raise ValueError("dataset is required when a summary table is given")
    ref = summary_reference_rows(summary, dataset)
    for row in ref.itertuples(index=False):
        values = row._asdict()
        for stat in PPRED_STATISTICS:
            out.append(StatRecord(PUBLISHED_LABEL, int(values["states"]), stat.display, float(values[stat.column])))
    return out


def _check_categories(values: pd.Series, dtype: pd.CategoricalDtype, column: str) -> None:
    unknown = sorted(set(values) - set(dtype.categories))
    if unknown:
        raise CategoryError(f"Unknown {column} labels: {unknown}")


def build_table(records: Iterable[StatRecord], states_to_consider: Sequence[int] = (20, 6)) -> pd.DataFrame:
    df = pd.DataFrame([vars(r) for r in records], columns=list(TABLE_COLUMNS))
    df = df[df["states"].isin(list(states_to_consider))].copy()
    _check_categories(df["transform"], TRANSFORM_DTYPE, "transform")
    df["statistic"] = [canonical_statistic(s) for s in df["statistic"]]
    dupes = df.duplicated(subset=["transform", "states", "statistic"])
    if dupes.any():
        first = df[dupes].iloc[0]
        raise ValueError(
            f"Duplicate record for {first['transform']}/{first['states']}/{first['statistic']}"
        )
    df["transform"] = df["transform"].astype(TRANSFORM_DTYPE)
    df["statistic"] = df["statistic"].astype(STATISTIC_DTYPE)
    df["states"] = df["states"].astype(int)
    df["value"] = df["value"].astype(float)
    df = df.sort_values(["transform", "states", "statistic"], ascending=[True, False, True])
    return df.reset_index(drop=True)


def normalize(
    support: Iterable[TreeSupport],
    reports: Iterable[PPredReport],
    summary: pd.DataFrame | None = None,
    *,
    dataset: str | None = None,
    states_to_consider: Sequence[int] = (20, 6),
) -> pd.DataFrame:
    records = reference_records(summary, dataset)
    records += support_records(support)
    records += ppred_records(reports)
    table = build_table(records, states_to_consider)
    logger.info("Normalized table: %d rows from %d records", len(table), len(records))
    return table


def adequacy_table(table: pd.DataFrame) -> pd.DataFrame:
    """Posterior-predictive rows with a two-sided p-value and adequacy flag."""
    df = table[table["statistic"].isin(PPRED_DISPLAY_NAMES)].copy()
    df["pvalue"] = [zscore_pvalue(z) for z in df["value"]]
    df["adequate"] = [is_adequate(z) for z in df["value"]]
    return df.reset_index(drop=True)


def convergence_table(summary: pd.DataFrame) -> pd.DataFrame:
    """Dataset, recoding and convergence tier of every summary row."""
    df = summary[["Dataset", "Recoding", "Maxdiff"]].copy()
    _check_categories(df["Recoding"], RECODING_DTYPE, "recoding")
    datasets = list(dict.fromkeys(df["Dataset"]))
    df["Dataset"] = df["Dataset"].astype(pd.CategoricalDtype(datasets, ordered=True))
    df["Recoding"] = df["Recoding"].astype(RECODING_DTYPE)
    df["convergence"] = [convergence_tier(float(m)) for m in df["Maxdiff"]]
    df["convergence"] = df["convergence"].astype(CONVERGENCE_DTYPE)
    return df.reset_index(drop=True)
