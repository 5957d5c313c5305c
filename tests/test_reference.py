"""Published constants and the summary table."""

from __future__ import annotations

import pytest

from sisterclade import reference
from sisterclade.errors import MissingReferenceError
from sisterclade.reference import (
    SUMMARY_COLUMNS,
    convergence_tier,
    load_summary_table,
    published_support,
    summary_reference_rows,
)


def _write_summary(path, rows):
    lines = ["\t".join(SUMMARY_COLUMNS)]
    for row in rows:
        lines.append("\t".join(str(x) for x in row))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


ROWS = [
    ["CATGTR", "Whelan_D20", "none", 0.0, 1.0, 0.05, 5000, 1.1, 20.5, 0.3, 4.2, 9.9, 1000, 300, 0.1],
    ["CATGTR", "Whelan_D20", "SR6", 1.0, 0.0, 0.2, 5000, 0.8, 3.1, 0.1, 2.2, 1.4, 1000, 250, 0.2],
    ["CATGTR", "Whelan_D20", "random", 0.4, 0.6, 0.9, 5000, 0.8, 3.1, 0.1, 2.2, 1.4, 1000, 250, 0.2],
]


def test_published_support_rows():
    assert set(published_support(20)) == {"ctenosis_support", "porifera_support"}
    assert published_support(6)["porifera_support"] == 1.0


def test_missing_published_support_is_fatal(monkeypatch):
    with pytest.raises(MissingReferenceError):
        published_support(12)
    monkeypatch.setitem(reference.PUBLISHED_SUPPORT, 6, {"porifera_support": 1.0})
    with pytest.raises(MissingReferenceError):
        published_support(6)


def test_load_summary_and_reference_rows(tmp_path):
    df = load_summary_table(_write_summary(tmp_path / "summary.tsv", ROWS))
    assert len(df) == 3
    ref = summary_reference_rows(df, "Whelan_D20")
    assert list(ref["states"]) == [20, 6]
    with pytest.raises(MissingReferenceError):
        summary_reference_rows(df, "Ryan_2013")


def test_load_summary_missing_columns(tmp_path):
    path = tmp_path / "summary.tsv"
    path.write_text("Model\tDataset\nCATGTR\tWhelan_D20\n", encoding="utf-8")
    with pytest.raises(ValueError, match="PPA_DIV"):
        load_summary_table(path)


def test_convergence_tier():
    assert convergence_tier(0.01) == "good"
    assert convergence_tier(0.1) == "acceptable"
    assert convergence_tier(0.3) == "poor"


def test_reference_rows_from_two_models_rejected(tmp_path):
    wag = ["WAG", "Whelan_D20", "none", 0.0, 1.0, 0.05, 5000, 1.1, 20.5, 0.3, 4.2, 9.9, 1000, 300, 0.1]
    df = load_summary_table(_write_summary(tmp_path / "summary.tsv", ROWS + [wag]))
    with pytest.raises(ValueError, match="Whelan_D20") as err:
        summary_reference_rows(df, "Whelan_D20")
    assert "none" in str(err.value)
