from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, TextIO

from ..driver.files import for_each_input
from ..io.fastx import Record, fastx_iter, open_input
from ..io.writer import format_record, open_output
from ..util.logger import Logger
from .predicates import FilterOptions, SearchPredicate


def filter_records(records: Iterable[Record], opts: FilterOptions) -> Iterator[Record]:
    """Yield records passing every filter, stopping once ``opts.number`` are taken.

    With a cap set, the source is not read past the last record taken.
    """
    taken = 0
    for rec in records:
        if not opts.keep(rec):
            continue
        yield rec
        taken += 1
        if opts.number and taken == opts.number:
            return


def write_records(records: Iterable[Record], out: TextIO) -> int:
    n = 0
    for rec in records:
        out.write(format_record(rec))
        n += 1
    return n


def run_filter(
    input_name: Optional[str],
    opts: FilterOptions,
    logger: Logger,
    *,
    output: Optional[str] = None,
) -> int:
    """Filter a single input; returns the number of records written.

    Failing to open the input is fatal and happens before the output is created.
    """
    with open_input(input_name) as handle, open_output(output) as out:
        n = write_records(filter_records(fastx_iter(handle), opts), out)
    logger.debug(f"filter kept {n} record(s)")
    return n


def run_grep(
    names: Optional[Sequence[str]],
    predicate: SearchPredicate,
    logger: Logger,
    *,
    output: Optional[str] = None,
) -> int:
    """Write records matching ``predicate`` from each input; returns the total written."""
    with open_output(output) as out:
        outcomes = for_each_input(
            names,
            lambda name, records: write_records((r for r in records if predicate(r)), out),
            logger,
        )
    return sum(o.value for o in outcomes if o.ok)
