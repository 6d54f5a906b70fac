from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from .fastx import STDIN, Record


def format_record(rec: Record) -> str:
    """Serialize a record in its own format, newline-terminated.

    FASTQ records without a captured separator get a bare ``+``; records
    without quality get a run of ``-`` as long as the sequence.
    """
    if rec.is_fasta:
        return f">{rec.id}{rec.description}\n{rec.sequence}\n"
    sep = rec.separator or "+"
    qual = rec.quality or "-" * len(rec.sequence)
    return f"@{rec.id}{rec.description}\n{rec.sequence}\n{sep}\n{qual}\n"


@contextmanager
def open_output(name: Optional[str] = None) -> Iterator[TextIO]:
    """Yield a writable text sink: a created file, or stdout for None/``-``.

    Files are closed and stdout flushed on every exit path.
    """
    if name is None or name == STDIN:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return
    with open(name, "w", encoding="utf-8") as f:
        yield f
