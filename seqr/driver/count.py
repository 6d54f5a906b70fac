from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..io.fastx import STDIN, Record
from ..util.logger import Logger
from .files import for_each_input, input_names


def count_records(records: Iterable[Record]) -> int:
    return sum(1 for _ in records)


def run_count(names: Optional[Sequence[str]], logger: Logger) -> int:
    """Print a record count per input and, for several inputs, a total.

    Returns the grand total over the inputs that could be read.
    """
    def action(name: str, records: Iterable[Record]) -> int:
        num = count_records(records)
        if name == STDIN:
            print(f"{num:>10}")
        else:
            print(f"{num:>10} {name}")
        return num

    outcomes = for_each_input(names, action, logger)
    total = sum(o.value for o in outcomes if o.ok)
    if len(input_names(names)) > 1:
        print(f"{total:>10}: total")
    return total


def header_line(rec: Record, id_only: bool = False, desc_only: bool = False) -> str:
    if id_only:
        return rec.id
    if desc_only:
        return rec.description.strip()
    return rec.head


def run_headers(
    names: Optional[Sequence[str]],
    logger: Logger,
    *,
    id_only: bool = False,
    desc_only: bool = False,
) -> None:
    if id_only and desc_only:
        raise ValueError("--id and --desc are mutually exclusive")

    def action(name: str, records: Iterable[Record]) -> None:
        for rec in records:
            print(header_line(rec, id_only, desc_only))

    for_each_input(names, action, logger)
