"""Published reference values and the pre-tabulated summary table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping

import pandas as pd

from .errors import MissingReferenceError
from .taxa import HYPOTHESES

logger = logging.getLogger(__name__)

PUBLISHED_LABEL = "SR6-published"
REPRODUCED_LABEL = "SR6-reproduced"
RANDOM_PREFIX = "random-"
CANONICAL_TRANSFORM = "none"

# Posterior support reported for the original unrecoded (20) and SR6 (6) runs.
PUBLISHED_SUPPORT: Dict[int, Dict[str, float]] = {
    20: {"ctenosis_support": 1.0, "porifera_support": 0.0},
    6: {"ctenosis_support": 0.0, "porifera_support": 1.0},
}

SUMMARY_COLUMNS = (
    "Model",
    "Dataset",
    "Recoding",
    "Porifera_sister",
    "Ctenophora_sister",
    "Maxdiff",
    "Cycles",
    "PPA_DIV",
    "PPA_MAX",
    "PPA_CONV",
    "PPA_VAR",
    "PPA_MEAN",
    "Burnin",
    "effsize",
    "rel_diff",
)
REQUIRED_SUMMARY_COLUMNS = ("Dataset", "Recoding", "Maxdiff", "PPA_DIV", "PPA_MAX", "PPA_CONV", "PPA_VAR", "PPA_MEAN")

# Summary-table recodings that correspond to the published analyses.
SUMMARY_RECODING_STATES: Mapping[str, int] = {"none": 20, "SR6": 6}

MAXDIFF_GOOD = 0.1
MAXDIFF_ACCEPTABLE = 0.3


def published_support(states: int) -> Dict[str, float]:
    row = PUBLISHED_SUPPORT.get(states)
    if row is None:
        raise MissingReferenceError(f"No published support for {states} states")
    expected = [f"{key}_support" for key in HYPOTHESES]
    missing = [k for k in expected if k not in row]
    if missing:
        raise MissingReferenceError(f"Published support for {states} states lacks {missing}")
    return {k: float(row[k]) for k in expected}


def load_summary_table(path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(path, sep="\t", keep_default_na=False, na_values=["", "NA", "NaN"])
    missing = [c for c in REQUIRED_SUMMARY_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Summary table {path} is missing required columns: {missing}")
    logger.info("Loaded %d summary rows from %s", len(df), path)
    return df


def summary_reference_rows(summary: pd.DataFrame, dataset: str) -> pd.DataFrame:
    """Summary rows of the published analyses, with a `states` column added."""
    df = summary[(summary["Dataset"] == dataset) & summary["Recoding"].isin(list(SUMMARY_RECODING_STATES))]
    if df.empty:
        raise MissingReferenceError(f"Summary table has no reference rows for dataset {dataset!r}")
    dupes = df[df.duplicated(subset=["Dataset", "Recoding"], keep=False)]
    if not dupes.empty:
        recodings = sorted(set(dupes["Recoding"]))
        raise ValueError(
            f"Summary table has more than one reference row for dataset {dataset!r}, recoding {recodings}"
        )
    df = df.copy()
    df["states"] = df["Recoding"].map(SUMMARY_RECODING_STATES).astype(int)
    return df.reset_index(drop=True)


def convergence_tier(maxdiff: float) -> str:
    if maxdiff < MAXDIFF_GOOD:
        return "good"
    if maxdiff < MAXDIFF_ACCEPTABLE:
        return "acceptable"
    return "poor"
