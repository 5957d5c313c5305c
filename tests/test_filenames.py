"""Run filename decoding."""

from __future__ import annotations

import pytest

from sisterclade.errors import FilenamePatternError
from sisterclade.filenames import (
    PPRED_SUFFIX,
    TREELIST_SUFFIX,
    RunLabel,
    discover_runs,
    parse_run_filename,
)


def test_parse_treelist_name():
    label = parse_run_filename("/data/whelan_transform-none_states-20.chain.treelist", suffix=TREELIST_SUFFIX)
    assert label == RunLabel(transform="none", states=20)


def test_parse_ppred_name():
    label = parse_run_filename("run1_transform-03_states-6.chain.ppred", suffix=PPRED_SUFFIX)
    assert label.transform == "03"
    assert label.states == 6


def test_token_round_trip():
    names = [
        "whelan_transform-none_states-20.chain.treelist",
        "x_transform-00_states-6.chain.ppred",
        "transform-SR6a_states-12.chain.treelist",
    ]
    for name in names:
        label = parse_run_filename(name)
        assert label.token in name
        again = parse_run_filename(f"prefix_{label.token}.chain.treelist")
        assert again == label


@pytest.mark.parametrize(
    "name",
    [
        "whelan_states-20.chain.treelist",
        "whelan_transform-none_states-xx.chain.treelist",
        "whelan_transform-no-ne_states-20.chain.treelist",
        "whelan_transform-none_states-20",
    ],
)
def test_bad_names_rejected(name):
    with pytest.raises(FilenamePatternError):
        parse_run_filename(name)


def test_suffix_mismatch_rejected():
    with pytest.raises(FilenamePatternError):
        parse_run_filename("a_transform-none_states-20.chain.ppred", suffix=TREELIST_SUFFIX)


def test_discover_runs_sorted(tmp_path):
    for name in ["b_transform-01_states-6.chain.ppred", "a_transform-00_states-6.chain.ppred", "notes.txt"]:
        (tmp_path / name).write_text("", encoding="utf-8")
    found = discover_runs(tmp_path, PPRED_SUFFIX)
    assert [p.name for p in found] == ["a_transform-00_states-6.chain.ppred", "b_transform-01_states-6.chain.ppred"]
    assert discover_runs(tmp_path, TREELIST_SUFFIX) == []


def test_states_are_integers():
    label = parse_run_filename("a_transform-01_states-012.chain.ppred")
    assert label.states == 12
    assert isinstance(label.states, int)
