"""End-to-end extraction: run files in, normalized table out."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List, Sequence

import pandas as pd

from .config import PipelineConfig
from .filenames import PPRED_SUFFIX, TREELIST_SUFFIX, discover_runs
from .normalize import normalize, relabel_transform
from .ppred import PPredReport, parse_ppred
from .reference import load_summary_table
from .support import TreeSupport, collect_tree_support, support_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    support: List[TreeSupport]
    reports: List[PPredReport]
    table: pd.DataFrame
    summary: pd.DataFrame | None = None


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    config.validate()
    tree_paths = discover_runs(config.analysis_dir, TREELIST_SUFFIX)
    ppred_paths = discover_runs(config.analysis_dir, PPRED_SUFFIX)
    if not tree_paths and not ppred_paths:
        raise FileNotFoundError(
            f"No *.{TREELIST_SUFFIX} or *.{PPRED_SUFFIX} files in {config.analysis_dir}"
        )
    logger.info(
        "Found %d tree lists and %d posterior-predictive reports in %s",
        len(tree_paths),
        len(ppred_paths),
        config.analysis_dir,
    )

    reports = [parse_ppred(p) for p in ppred_paths]
    support = collect_tree_support(tree_paths, config)

    summary = None
    if config.summary_path is not None:
        summary = load_summary_table(config.summary_path)

    table = normalize(
        support,
        reports,
        summary,
        dataset=config.reference_dataset,
        states_to_consider=config.states_to_consider,
    )
    return PipelineResult(support=support, reports=reports, table=table, summary=summary)


def support_frame(records: Sequence[TreeSupport], threshold: float) -> pd.DataFrame:
    rows = [
        {
            "transform": relabel_transform(r.transform),
            "states": r.states,
            "porifera_support": r.porifera_support,
            "ctenosis_support": r.ctenosis_support,
            "n_samples": r.n_samples,
            "call": support_call(r, threshold),
        }
        for r in records
    ]
    columns = ["transform", "states", "porifera_support", "ctenosis_support", "n_samples", "call"]
    return pd.DataFrame(rows, columns=columns)
