"""Record selection: length/id filtering and pattern search."""

from .predicates import FilterOptions, GrepPart, SearchPredicate  # noqa: F401
