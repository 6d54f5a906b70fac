"""Record reading and writing for FASTA/FASTQ text."""

from .fastx import Format, Record, fastx_iter, open_input, open_maybe_gzip  # noqa: F401
from .writer import format_record, open_output  # noqa: F401
