"""Record predicates for the ``filter`` and ``grep`` verbs.

All predicates are pure over record content and their fixed options.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional

from ..errors import InvalidPatternError
from ..io.fastx import Record, open_input


def read_ids(path: str) -> List[str]:
    """Read one id per line, dropping empty lines."""
    with open_input(path) as f:
        return [line for line in (raw.rstrip("\r\n") for raw in f) if line]


def id_predicate(ids: FrozenSet[str], rec: Record) -> bool:
    # An empty set admits everything
    return not ids or rec.id in ids or rec.description in ids


def min_len_predicate(min_len: int, rec: Record) -> bool:
    return min_len == 0 or len(rec.sequence) >= min_len


def max_len_predicate(max_len: int, rec: Record) -> bool:
    return max_len == 0 or len(rec.sequence) <= max_len


@dataclass(frozen=True)
class FilterOptions:
    min_len: int = 0
    max_len: int = 0
    number: int = 0
    ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        *,
        min_len: int = 0,
        max_len: int = 0,
        number: int = 0,
        ids: Optional[Iterable[str]] = None,
        ids_from_file: Optional[str] = None,
    ) -> "FilterOptions":
        """Resolve the id set (file wins over literal ids) and validate bounds."""
        for flag, value in (("min-len", min_len), ("max-len", max_len), ("number", number)):
            if value < 0:
                raise ValueError(f"--{flag} must be >= 0 (got {value})")
        id_list = read_ids(ids_from_file) if ids_from_file else list(ids or [])
        return cls(min_len=min_len, max_len=max_len, number=number, ids=frozenset(id_list))

    def keep(self, rec: Record) -> bool:
        return (
            min_len_predicate(self.min_len, rec)
            and max_len_predicate(self.max_len, rec)
            and id_predicate(self.ids, rec)
        )


class GrepPart(Enum):
    HEAD = "head"
    SEQUENCE = "seq"
    QUALITY = "qual"

    def text(self, rec: Record) -> str:
        if self is GrepPart.HEAD:
            return rec.head
        if self is GrepPart.SEQUENCE:
            return rec.sequence
        return rec.quality


def compile_pattern(pattern: str, insensitive: bool = False) -> re.Pattern:
    flags = re.IGNORECASE if insensitive else 0
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(pattern) from e


@dataclass(frozen=True)
class SearchPredicate:
    regex: re.Pattern
    part: GrepPart = GrepPart.HEAD
    invert: bool = False

    @classmethod
    def build(
        cls, pattern: str, *, part: GrepPart = GrepPart.HEAD, invert: bool = False, insensitive: bool = False
    ) -> "SearchPredicate":
        return cls(regex=compile_pattern(pattern, insensitive), part=part, invert=invert)

    def __call__(self, rec: Record) -> bool:
        return (self.regex.search(self.part.text(rec)) is not None) ^ self.invert
