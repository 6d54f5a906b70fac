"""Single-pass length statistics.

The running mean is kept in integers and updated with
``mean += (length - mean) / n``, the division truncating toward zero. It
tracks the arithmetic mean closely but can differ from it by rounding; the
reported value is the running one, not a recomputation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..errors import NoSequencesError
from ..io.fastx import Record, fastx_iter, open_input
from ..util.logger import Logger


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (``//`` rounds toward -inf)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def top_n_threshold(num_by_len: Dict[int, int], top_n: int) -> int:
    """Length at or above which the ``top_n`` longest sequences fall.

    Counts are accumulated from the longest length down; the first length
    where the running total reaches ``top_n`` is returned. When ``top_n``
    exceeds the number of sequences this is the smallest length. Requires numpy.
    """
    if not num_by_len:
        raise NoSequencesError()
    try:
        import numpy as np  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("Top-N computation requires 'numpy'.") from e

    lengths = np.array(sorted(num_by_len, reverse=True), dtype=np.int64)
    cumulative = np.cumsum([num_by_len[int(n)] for n in lengths], dtype=np.int64)
    idx = int(np.searchsorted(cumulative, max(top_n, 0), side="left"))
    return int(lengths[min(idx, len(lengths) - 1)])


@dataclass(frozen=True)
class StatsSummary:
    num_seqs: int
    smallest: int
    largest: int
    average: int
    top_n: int
    top_n_length: int

    def lines(self):
        yield f"Num seqs: {self.num_seqs}"
        yield f"Smallest: {self.smallest}"
        yield f"Largest: {self.largest}"
        yield f"Average: {self.average}"
        yield f"Top {self.top_n}: {self.top_n_length}"


class LengthStats:
    """Running mean plus a length histogram for one input."""

    def __init__(self):
        self.mean = 0
        self.count = 0
        self.num_by_len: Dict[int, int] = {}

    def add(self, length: int) -> None:
        self.count += 1
        self.mean += trunc_div(length - self.mean, self.count)
        self.num_by_len[length] = self.num_by_len.get(length, 0) + 1

    def summary(self, top_n: int = 100) -> StatsSummary:
        if not self.num_by_len:
            raise NoSequencesError()
        return StatsSummary(
            num_seqs=sum(self.num_by_len.values()),
            smallest=min(self.num_by_len),
            largest=max(self.num_by_len),
            average=self.mean,
            top_n=top_n,
            top_n_length=top_n_threshold(self.num_by_len, top_n),
        )


def summarize(records: Iterable[Record], top_n: int = 100, progress: bool = True) -> StatsSummary:
    stats = LengthStats()
    for rec in records:
        length = len(rec.sequence)
        if progress:
            print(f"= {rec.id}\t{length}")
        stats.add(length)
    return stats.summary(top_n)


def run_stats(input_name: Optional[str], logger: Logger, *, top_n: int = 100) -> StatsSummary:
    with open_input(input_name) as handle:
        summary = summarize(fastx_iter(handle), top_n)
    logger.debug(f"stats over {summary.num_seqs} record(s)")
    for line in summary.lines():
        print(line)
    return summary
