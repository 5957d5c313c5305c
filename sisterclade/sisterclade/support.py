"""Posterior support for the rooting hypotheses from MCMC tree lists."""

from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
import io
import logging
from pathlib import Path
from typing import AbstractSet, List, Sequence

import numpy as np
import treeswift

from .clades import is_monophyletic
from .config import DEFAULT_BURNIN, PipelineConfig
from .errors import InsufficientSamplesError
from .filenames import TREELIST_SUFFIX, parse_run_filename
from .taxa import HYPOTHESES, HYPOTHESIS_NAMES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeSupport:
    transform: str
    states: int
    ctenosis_support: float
    porifera_support: float
    n_samples: int


def _read_tree(newick: str) -> treeswift.Tree:
    if hasattr(treeswift, "read_tree_newick"):
        return treeswift.read_tree_newick(newick)
    return treeswift.read_tree(io.StringIO(newick), "newick")


def read_tree_samples(path: str | Path) -> List[treeswift.Tree]:
    """Read Newick trees from a tree list (one sample per line)."""
    trees: List[treeswift.Tree] = []
    with open(path, "r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                tree = _read_tree(line)
            except Exception as exc:
                raise ValueError(f"{path}: unreadable tree on line {line_number}") from exc
            trees.append(tree)
    return trees


def support_frequency(trees: Sequence[treeswift.Tree], taxon_set: AbstractSet[str]) -> float:
    if not trees:
        raise InsufficientSamplesError("No trees to score")
    hits = np.array([is_monophyletic(tree, taxon_set) for tree in trees], dtype=bool)
    return float(np.mean(hits))


def get_tree_support(path: str | Path, burnin: int = DEFAULT_BURNIN) -> TreeSupport:
    label = parse_run_filename(path, suffix=TREELIST_SUFFIX)
    trees = read_tree_samples(path)
    kept = trees[burnin:]
    if not kept:
        raise InsufficientSamplesError(
            f"{path}: {len(trees)} trees, need more than {burnin} burn-in samples"
        )
    freqs = {key: support_frequency(kept, clade) for key, clade in HYPOTHESES.items()}
    logger.debug(
        "%s: %d post-burn-in trees, %s",
        Path(path).name,
        len(kept),
        ", ".join(f"{HYPOTHESIS_NAMES[k]}={v:.3f}" for k, v in freqs.items()),
    )
    return TreeSupport(
        transform=label.transform,
        states=label.states,
        ctenosis_support=freqs["ctenosis"],
        porifera_support=freqs["porifera"],
        n_samples=len(kept),
    )


def collect_tree_support(paths: Sequence[str | Path], config: PipelineConfig) -> List[TreeSupport]:
    """Score every tree list, one pool task per file.

    Results come back in input order. The first failing file aborts the
    batch and cancels tasks that have not started.
    """
    paths = [Path(p) for p in paths]
    if config.n_workers == 1 or len(paths) <= 1:
        return [get_tree_support(p, burnin=config.burnin) for p in paths]

    workers = min(config.n_workers, len(paths))
    logger.info("Scoring %d tree lists on %d workers", len(paths), workers)
    pool = ProcessPoolExecutor(max_workers=workers)
    try:
        futures = [pool.submit(get_tree_support, p, config.burnin) for p in paths]
        results = [f.result() for f in futures]
    except BaseException:
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()
    return results


def support_call(record: TreeSupport, threshold: float) -> str:
    if record.porifera_support >= threshold:
        return HYPOTHESIS_NAMES["porifera"]
    if record.ctenosis_support >= threshold:
        return HYPOTHESIS_NAMES["ctenosis"]
    return "unresolved"
