"""Length statistics over a record stream."""

from .aggregate import LengthStats, StatsSummary, run_stats  # noqa: F401
