from __future__ import annotations


class SeqrError(ValueError):
    """Base class for fatal seqr conditions."""


class InvalidPatternError(SeqrError):
    def __init__(self, pattern: str):
        super().__init__(f'Invalid pattern "{pattern}"')
        self.pattern = pattern


class NoSequencesError(SeqrError):
    def __init__(self):
        super().__init__("No sequences found!")


class MalformedRecordError(SeqrError):
    """Raised by the record reader when the input framing is broken."""
