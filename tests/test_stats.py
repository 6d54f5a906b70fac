"""
Tests for the length statistics aggregator.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from seqr.errors import NoSequencesError
from seqr.io import Format, Record
from seqr.stats import LengthStats
from seqr.stats.aggregate import summarize, top_n_threshold, trunc_div


def _stats(*lengths):
    s = LengthStats()
    for n in lengths:
        s.add(n)
    return s


def test_three_records():
    s = _stats(10, 20, 30)
    summary = s.summary(top_n=2)
    assert summary.num_seqs == 3
    assert summary.smallest == 10
    assert summary.largest == 30
    assert summary.average == 20
    assert summary.top_n_length == 20


def test_running_mean_steps():
    s = LengthStats()
    means = []
    for n in (10, 20, 30):
        s.add(n)
        means.append(s.mean)
    assert means == [10, 15, 20]


def test_running_mean_truncates_toward_zero():
    # 120, 62, 26, 36 -> 120, 91, 70, 62 (floor division would end at 61)
    assert _stats(120, 62, 26, 36).mean == 62
    assert _stats(30, 10).mean == 20
    assert trunc_div(-7, 2) == -3
    assert trunc_div(7, 2) == 3


def test_running_mean_may_differ_from_true_mean():
    s = _stats(1, 2)
    assert s.mean == 1


def test_histogram_merges_equal_lengths():
    s = _stats(5, 5, 7)
    assert s.num_by_len == {5: 2, 7: 1}
    assert s.summary().num_seqs == 3


def test_top_n_edges():
    hist = {30: 1, 20: 1, 10: 1}
    assert top_n_threshold(hist, 0) == 30
    assert top_n_threshold(hist, -5) == 30
    assert top_n_threshold(hist, 1) == 30
    assert top_n_threshold(hist, 3) == 10
    assert top_n_threshold(hist, 100) == 10


def test_top_n_is_non_increasing():
    hist = {100: 3, 50: 2, 20: 4, 7: 1}
    values = [top_n_threshold(hist, n) for n in range(0, 15)]
    assert values == sorted(values, reverse=True)
    assert top_n_threshold(hist, 4) == 50


def test_single_record():
    summary = _stats(42).summary()
    assert (summary.smallest, summary.largest, summary.average, summary.top_n_length) == (42, 42, 42, 42)


def test_no_records():
    with pytest.raises(NoSequencesError, match="No sequences found"):
        LengthStats().summary()


def test_summarize_prints_progress(capsys):
    recs = [Record("a", "", "AC", Format.FASTA), Record("b", " x", "ACGT", Format.FASTA)]
    summary = summarize(recs, top_n=1)
    assert capsys.readouterr().out == "= a\t2\n= b\t4\n"
    assert list(summary.lines()) == [
        "Num seqs: 2",
        "Smallest: 2",
        "Largest: 4",
        "Average: 3",
        "Top 1: 4",
    ]
