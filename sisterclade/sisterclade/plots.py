"""Tables and figures written from the normalized table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from .normalize import PPRED_DISPLAY_NAMES, SUPPORT_STATISTICS  # noqa: E402
from .ppred import Z_ADEQUACY_CUTOFF  # noqa: E402

logger = logging.getLogger(__name__)


def write_table(table: pd.DataFrame, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(path, sep="\t", index=False)
    logger.info("Wrote %s (%d rows)", path, len(table))
    return path


def _present_transforms(df: pd.DataFrame) -> list[str]:
    present = set(df["transform"].astype(str))
    return [str(t) for t in df["transform"].cat.categories if str(t) in present]


def plot_support(
    table: pd.DataFrame,
    out_path: Path,
    *,
    states_to_consider: Sequence[int] = (20, 6),
    x_breaks: Sequence[float] = (0.0, 0.25, 0.5, 0.75, 1.0),
    threshold: float | None = 0.95,
) -> Path:
    df = table[table["statistic"].isin(SUPPORT_STATISTICS)]
    transforms = _present_transforms(df)
    y = np.arange(len(transforms), dtype=float)
    height = 0.38

    fig, axes = plt.subplots(1, len(states_to_consider), figsize=(4.2 * len(states_to_consider), 0.5 * len(transforms) + 1.8), squeeze=False)
    for ax, states in zip(axes[0], states_to_consider):
        sub = df[df["states"] == states]
        for i, stat in enumerate(SUPPORT_STATISTICS):
            vals = []
            for t in transforms:
                hit = sub[(sub["transform"] == t) & (sub["statistic"] == stat)]["value"]
                vals.append(float(hit.iloc[0]) if len(hit) else np.nan)
            ax.barh(y + (i - 0.5) * height, vals, height=height, label=stat)
        if threshold is not None:
            ax.axvline(threshold, color="gray", linestyle="--", linewidth=1)
        ax.set_yticks(y)
        ax.set_yticklabels(transforms)
        ax.invert_yaxis()
        ax.set_xlim(min(x_breaks), max(x_breaks))
        ax.set_xticks(list(x_breaks))
        ax.set_xlabel("Posterior support")
        ax.set_title(f"{states} states")
        ax.grid(axis="x", alpha=0.3, linestyle=":")
    axes[0][0].legend(fontsize=8, loc="lower right")
    fig.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    logger.info("Wrote %s", out_path)
    return out_path


def plot_ppred(
    table: pd.DataFrame,
    out_path: Path,
    *,
    states_to_consider: Sequence[int] = (20, 6),
) -> Path:
    df = table[table["statistic"].isin(PPRED_DISPLAY_NAMES)]
    transforms = _present_transforms(df)
    x = np.arange(len(PPRED_DISPLAY_NAMES), dtype=float)
    width = 0.8 / max(1, len(transforms))

    fig, axes = plt.subplots(len(states_to_consider), 1, figsize=(9, 3.2 * len(states_to_consider)), squeeze=False)
    for ax, states in zip(axes[:, 0], states_to_consider):
        sub = df[df["states"] == states]
        for i, t in enumerate(transforms):
            vals = []
            for stat in PPRED_DISPLAY_NAMES:
                hit = sub[(sub["transform"] == t) & (sub["statistic"] == stat)]["value"]
                vals.append(float(hit.iloc[0]) if len(hit) else np.nan)
            ax.plot(x + (i - (len(transforms) - 1) / 2) * width, vals, "o", label=t)
        for guide in (-Z_ADEQUACY_CUTOFF, Z_ADEQUACY_CUTOFF):
            ax.axhline(guide, color="gray", linestyle="--", linewidth=1)
        ax.set_xticks(x)
        ax.set_xticklabels(PPRED_DISPLAY_NAMES, rotation=20, ha="right")
        ax.set_ylabel("z-score")
        ax.set_title(f"{states} states")
        ax.grid(axis="y", alpha=0.3, linestyle=":")
    if transforms:
        axes[0][0].legend(ncol=3, fontsize=8)
    fig.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    logger.info("Wrote %s", out_path)
    return out_path


def write_markdown_summary(support: pd.DataFrame, adequacy: pd.DataFrame, out_path: Path) -> Path:
    lines = [
        "# Recoding Support Summary",
        "",
        "| Transform | States | Porifera-sister | Ctenophora-sister | Samples | Call |",
        "|---|---|---|---|---|---|",
    ]
    for row in support.itertuples(index=False):
        lines.append(
            f"| {row.transform} | {row.states} | {row.porifera_support:.3f} | "
            f"{row.ctenosis_support:.3f} | {row.n_samples} | {row.call} |"
        )
    if len(adequacy):
        failing = adequacy[~adequacy["adequate"]]
        lines.append("")
        lines.append(f"## Posterior-Predictive Tests (|z| > {Z_ADEQUACY_CUTOFF:g})")
        if failing.empty:
            lines.append("- none")
        for row in failing.itertuples(index=False):
            lines.append(f"- {row.transform} / {row.states} states / {row.statistic}: z={row.value:.2f}, p={row.pvalue:.3g}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote %s", out_path)
    return out_path
