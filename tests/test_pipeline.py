"""End-to-end runs over synthetic analysis directories."""

from __future__ import annotations

import pandas as pd
import pytest

from sisterclade.config import PipelineConfig
from sisterclade.errors import StructuralValidationError
from sisterclade.pipeline import run_pipeline, support_frame
from sisterclade.ppred import PPRED_STATISTICS
from sisterclade.taxa import CTENOPHORA, FUNGI, OUTGROUP_AND_OTHER_ANIMALS, PORIFERA


def _group(taxa) -> str:
    return "(" + ",".join(sorted(taxa)) + ")"


F, P, C, O = (_group(g) for g in (FUNGI, PORIFERA, CTENOPHORA, OUTGROUP_AND_OTHER_ANIMALS))
PORIFERA_TREE = f"({F},{P},({O},{C}));"
CTENO_TREE = f"({F},{C},({O},{P}));"


def _write_report(path, z: float):
    lines = [""] * 30
    for stat in PPRED_STATISTICS:
        lines[stat.line - 1] = stat.title
        lines[stat.line + 2] = f"z-score : {z}"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _make_run_dir(root):
    for states in (20, 6):
        trees = [CTENO_TREE] * 200 + [PORIFERA_TREE]
        (root / f"whelan_transform-none_states-{states}.chain.treelist").write_text(
            "\n".join(trees) + "\n", encoding="utf-8"
        )
        _write_report(root / f"whelan_transform-none_states-{states}.chain.ppred", 1.5)
    _write_report(root / "whelan_transform-00_states-6.chain.ppred", 3.5)
    return root


def test_run_pipeline_porifera_sister(tmp_path):
    run_dir = _make_run_dir(tmp_path)
    result = run_pipeline(PipelineConfig(analysis_dir=run_dir, n_workers=2))
    assert len(result.support) == 2
    for rec in result.support:
        assert rec.transform == "none"
        assert rec.porifera_support == 1.0
        assert rec.ctenosis_support == 0.0
        assert rec.n_samples == 1
    assert {r.states for r in result.support} == {20, 6}

    table = result.table
    repro = table[(table["transform"] == "SR6-reproduced") & (table["statistic"] == "Porifera-sister")]
    assert sorted(repro["value"]) == [1.0, 1.0]
    random_rows = table[table["transform"] == "random-00"]
    assert len(random_rows) == 5
    assert set(random_rows["value"]) == {3.5}


def test_run_pipeline_is_idempotent(tmp_path):
    run_dir = _make_run_dir(tmp_path)
    config = PipelineConfig(analysis_dir=run_dir, n_workers=1)
    first = run_pipeline(config).table
    second = run_pipeline(config).table
    pd.testing.assert_frame_equal(first, second)


def test_run_pipeline_states_filter(tmp_path):
    run_dir = _make_run_dir(tmp_path)
    result = run_pipeline(PipelineConfig(analysis_dir=run_dir, n_workers=1, states_to_consider=(6,)))
    assert set(result.table["states"]) == {6}


def test_run_pipeline_aborts_on_malformed_report(tmp_path):
    run_dir = _make_run_dir(tmp_path)
    bad = run_dir / "whelan_transform-01_states-6.chain.ppred"
    _write_report(bad, 0.0)
    text = bad.read_text(encoding="utf-8").replace("diversity test", "diversity tset", 1)
    bad.write_text(text, encoding="utf-8")
    with pytest.raises(StructuralValidationError):
        run_pipeline(PipelineConfig(analysis_dir=run_dir, n_workers=1))


def test_run_pipeline_empty_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_pipeline(PipelineConfig(analysis_dir=tmp_path, n_workers=1))


def test_support_frame(tmp_path):
    run_dir = _make_run_dir(tmp_path)
    result = run_pipeline(PipelineConfig(analysis_dir=run_dir, n_workers=1))
    frame = support_frame(result.support, threshold=0.95)
    assert list(frame["transform"]) == ["SR6-reproduced", "SR6-reproduced"]
    assert set(frame["call"]) == {"Porifera-sister"}
