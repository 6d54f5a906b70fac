"""seqr: query and summarize FASTA/FASTQ files from the command line."""

__version__ = "0.1.0"
