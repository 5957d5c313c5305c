"""sisterclade command-line interface."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence

from .config import DEFAULT_BURNIN, DEFAULT_REFERENCE_DATASET, DEFAULT_SUPPORT_THRESHOLD, PipelineConfig, default_workers
from .errors import SisterCladeError

logger = logging.getLogger(__name__)


def _parse_states_arg(raw: str) -> tuple[int, ...] | None:
    try:
        states = tuple(int(x) for x in raw.split(",") if x.strip())
    except ValueError:
        return None
    return states or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sisterclade",
        description=(
            "Tabulate Porifera-/Ctenophora-sister support and posterior-predictive "
            "z-scores from a directory of recoding runs."
        ),
    )
    parser.add_argument("analysis_dir", help="Directory of *.chain.treelist and *.chain.ppred files.")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for tables and figures. Defaults to ANALYSIS_DIR/results.",
    )
    parser.add_argument("--summary", default=None, help="Optional pre-tabulated summary TSV.")
    parser.add_argument(
        "--dataset",
        default=DEFAULT_REFERENCE_DATASET,
        help="Summary-table dataset holding the published reference analyses.",
    )
    parser.add_argument("--burnin", type=int, default=DEFAULT_BURNIN, help="Tree samples dropped per chain.")
    parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_SUPPORT_THRESHOLD,
        help="Posterior probability counted as strong support.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=default_workers(),
        help="Worker processes for tree-list scoring.",
    )
    parser.add_argument("--states", default="20,6", help="Comma-separated state counts to keep.")
    parser.add_argument("--no-figures", action="store_true", help="Write tables only.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file detail.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    states = _parse_states_arg(args.states)
    if states is None:
        print("error: --states must be a comma-separated list of integers", file=sys.stderr)
        return 2
    analysis_dir = Path(args.analysis_dir)
    if not analysis_dir.is_dir():
        print(f"error: not a directory: {analysis_dir}", file=sys.stderr)
        return 2

    try:
        config = PipelineConfig(
            analysis_dir=analysis_dir,
            burnin=args.burnin,
            support_threshold=args.threshold,
            n_workers=args.workers,
            states_to_consider=states,
            summary_path=Path(args.summary) if args.summary else None,
            reference_dataset=args.dataset,
        ).validate()
    except SisterCladeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    from .normalize import adequacy_table, convergence_table
    from .pipeline import run_pipeline, support_frame
    from .plots import plot_ppred, plot_support, write_markdown_summary, write_table

    try:
        result = run_pipeline(config)
        convergence = None if result.summary is None else convergence_table(result.summary)
    except (SisterCladeError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out_dir = Path(args.output_dir) if args.output_dir else analysis_dir / "results"
    support = support_frame(result.support, config.support_threshold)
    adequacy = adequacy_table(result.table)
    write_table(result.table, out_dir / "normalized.tsv")
    write_table(support, out_dir / "support.tsv")
    write_markdown_summary(support, adequacy, out_dir / "summary.md")
    if convergence is not None:
        write_table(convergence, out_dir / "convergence.tsv")
    if not args.no_figures:
        plot_support(
            result.table,
            out_dir / "support.pdf",
            states_to_consider=config.states_to_consider,
            x_breaks=config.x_breaks,
            threshold=config.support_threshold,
        )
        plot_ppred(result.table, out_dir / "ppred.pdf", states_to_consider=config.states_to_consider)
    logger.info("Done: %d normalized rows in %s", len(result.table), out_dir)
    return 0
