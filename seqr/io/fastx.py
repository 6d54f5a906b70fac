"""Streaming FASTA/FASTQ reader.

Records are decoded one at a time from a text handle; nothing beyond the
record currently being assembled is kept in memory. The format is decided
per record by its header marker, so mixed files decode fine.
"""

from __future__ import annotations

import gzip
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generator, Iterable, Iterator, Optional, TextIO

from ..errors import MalformedRecordError

STDIN = "-"


class Format(Enum):
    FASTA = "fasta"
    FASTQ = "fastq"


@dataclass(frozen=True)
class Record:
    id: str
    description: str
    sequence: str
    format: Format
    separator: str = ""
    quality: str = ""

    @property
    def is_fasta(self) -> bool:
        return self.format is Format.FASTA

    @property
    def head(self) -> str:
        """Header text as written, minus the marker."""
        return self.id + self.description

    def __len__(self) -> int:
        return len(self.sequence)


def open_maybe_gzip(path: Path, mode: str = "rt"):
    p = str(path)
    if p.endswith(".gz"):
        return gzip.open(p, mode)
    return open(p, mode)


@contextmanager
def open_input(name: Optional[str] = None) -> Iterator[TextIO]:
    """Open a named path, or stdin for ``-``/None.

    Raises OSError with the OS-level cause when the path cannot be opened.
    stdin is left open on exit.
    """
    if name is None or name == STDIN:
        yield sys.stdin
        return
    with open_maybe_gzip(Path(name), "rt") as f:
        yield f


def split_header(text: str) -> tuple[str, str]:
    """Split header text into (id, description).

    The description keeps its leading whitespace so that ``id + description``
    reproduces the header as written.
    """
    for i, c in enumerate(text):
        if c.isspace():
            return text[:i], text[i:]
    return text, ""


def _header(line: str, lineno: int) -> tuple[str, str]:
    rec_id, desc = split_header(line[1:])
    if not rec_id:
        raise MalformedRecordError(f"line {lineno}: header without an identifier")
    return rec_id, desc


def fastx_iter(lines: Iterable[str]) -> Generator[Record, None, None]:
    """Stream FASTA and FASTQ records from an iterable of text lines."""
    it = enumerate(lines, start=1)
    pending: Optional[tuple[int, str]] = None

    def next_line() -> Optional[tuple[int, str]]:
        nonlocal pending
        if pending is not None:
            item, pending = pending, None
            return item
        for lineno, raw in it:
            line = raw.rstrip("\r\n")
            if line:
                return lineno, line
        return None

    while True:
        item = next_line()
        if item is None:
            return
        lineno, line = item
        marker = line[0]
        if marker not in ">@":
            raise MalformedRecordError(
                f"line {lineno}: expected '>' or '@' at start of record, found {line[:20]!r}"
            )
        rec_id, desc = _header(line, lineno)

        if marker == ">":
            seq_chunks = []
            while True:
                item = next_line()
                if item is None:
                    break
                if item[1][0] in ">@":
                    pending = item
                    break
                seq_chunks.append(item[1])
            yield Record(rec_id, desc, "".join(seq_chunks), Format.FASTA)
            continue

        seq_chunks = []
        separator = ""
        while True:
            item = next_line()
            if item is None:
                break
            if item[1][0] == "+":
                separator = item[1]
                break
            if item[1][0] in ">@":
                pending = item
                break
            seq_chunks.append(item[1])
        sequence = "".join(seq_chunks)

        qual_chunks = []
        if separator:
            qual_len = 0
            # '@' is a valid quality character, so quality lines are
            # consumed by length rather than by marker.
            while qual_len < len(sequence):
                item = next_line()
                if item is None:
                    break
                qual_chunks.append(item[1])
                qual_len += len(item[1])
        quality = "".join(qual_chunks)
        if quality and len(quality) != len(sequence):
            raise MalformedRecordError(
                f"record {rec_id!r}: quality length {len(quality)} does not match sequence length {len(sequence)}"
            )
        yield Record(rec_id, desc, sequence, Format.FASTQ, separator, quality)
