"""Multi-file driving and the per-file verbs (count, headers)."""

from .files import FileOutcome, for_each_input  # noqa: F401
