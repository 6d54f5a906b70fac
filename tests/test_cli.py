"""
End-to-end tests for the seqr command line.
"""

import io
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from seqr.__main__ import main

INPUTS = Path(__file__).parent / "inputs"
DFAM = str(INPUTS / "dfam.fa")
READS = str(INPUTS / "reads.fq")

ALU_FA = (
    ">DF0000002.4 AluY#SINE/Alu\n"
    "GGCCGGGCGCGGTGGCTCACGCCTGTAATCCCAGCACTTTGGGAGGCCGAGGCGGGCGGATC\n"
    ">DF0000004.4 AluSx#SINE/Alu\n"
    "GGCCGGGCGCGGTGGCTCACGCCTGTAATCCCAGCA\n"
)


def test_no_args_prints_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code != 0
    assert "usage" in capsys.readouterr().err


def test_grep_stdout(capsys):
    assert main(["grep", "Alu", DFAM]) == 0
    assert capsys.readouterr().out == ALU_FA


def test_grep_insensitive_alias(capsys):
    assert main(["gr", "-i", "alu", DFAM]) == 0
    assert capsys.readouterr().out == ALU_FA


def test_grep_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(Path(DFAM).read_text()))
    assert main(["grep", "Alu"]) == 0
    assert capsys.readouterr().out == ALU_FA


def test_grep_outfile(tmp_path, capsys):
    out = tmp_path / "alu.fa"
    assert main(["grep", "Alu", DFAM, "-o", str(out)]) == 0
    assert capsys.readouterr().out == ""
    assert out.read_text() == ALU_FA


def test_grep_invert_and_fastq(capsys):
    assert main(["grep", "-v", "-p", "qual", "@", READS]) == 0
    out = capsys.readouterr().out
    assert out.startswith("@read1 sample=A\n")
    assert "@read2" not in out
    assert "@read3\n" in out


def test_grep_bad_pattern(tmp_path, capsys):
    out = tmp_path / "never.fa"
    assert main(["grep", "*foo", DFAM, "-o", str(out)]) == 1
    assert 'Invalid pattern "*foo"' in capsys.readouterr().err
    assert not out.exists()


def test_grep_warns_bad_file(tmp_path, capsys):
    bad = str(tmp_path / "nope.fa")
    assert main(["grep", "Alu", bad, DFAM]) == 0
    captured = capsys.readouterr()
    assert f"{bad}: No such file or directory (os error 2)" in captured.err
    assert captured.out == ALU_FA


def test_count(capsys):
    assert main(["count", DFAM, READS]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == f"{7:>10}: total"


def test_headers_desc(capsys):
    assert main(["headers", "--desc", DFAM]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "MIR",
        "AluY#SINE/Alu",
        "L2#LINE/L2",
        "AluSx#SINE/Alu",
    ]


def test_headers_default_concatenates(capsys):
    assert main(["headers", READS]) == 0
    assert capsys.readouterr().out.splitlines() == ["read1 sample=A", "read2 sample=B", "read3"]


def test_headers_flags_exclusive(capsys):
    with pytest.raises(SystemExit):
        main(["headers", "--id", "--desc", DFAM])


def test_stats(capsys):
    assert main(["stats", DFAM, "--top-n", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "= DF0000001.4\t120",
        "= DF0000002.4\t62",
        "= DF0000003.4\t26",
        "= DF0000004.4\t36",
        "Num seqs: 4",
        "Smallest: 26",
        "Largest: 120",
        "Average: 62",
        "Top 2: 62",
    ]


def test_stats_empty_input(tmp_path, capsys):
    empty = tmp_path / "empty.fa"
    empty.write_text("")
    assert main(["stats", str(empty)]) == 1
    assert "No sequences found" in capsys.readouterr().err


def test_stats_missing_file_is_fatal(tmp_path, capsys):
    assert main(["stats", str(tmp_path / "nope.fa")]) == 1
    assert "No such file or directory" in capsys.readouterr().err


def test_filter_lengths(capsys):
    assert main(["filter", DFAM, "--min-len", "30", "--max-len", "100"]) == 0
    out = capsys.readouterr().out
    assert out == ALU_FA


def test_filter_identity_round_trip(capsys):
    assert main(["filter", READS]) == 0
    assert capsys.readouterr().out == Path(READS).read_text().replace(
        "IIIIIIIIII\nIIIIIIIIII\n", "IIIIIIIIIIIIIIIIIIII\n"
    )


def test_filter_number_and_ids_file(tmp_path, capsys):
    ids = tmp_path / "ids.txt"
    ids.write_text("DF0000003.4\n\nDF0000001.4\nDF0000004.4\n")
    out = tmp_path / "out.fa"
    assert main(["fi", DFAM, "-f", str(ids), "-n", "2", "-o", str(out)]) == 0
    assert capsys.readouterr().out == ""
    assert [line for line in out.read_text().splitlines() if line.startswith(">")] == [
        ">DF0000001.4 MIR",
        ">DF0000003.4 L2#LINE/L2",
    ]


def test_filter_ids_literal(capsys):
    assert main(["filter", READS, "--ids", "read2"]) == 0
    assert capsys.readouterr().out == "@read2 sample=B\nACGTAC\n+read2 sample=B\n@@@III\n"


def test_filter_missing_input_is_fatal(tmp_path, capsys):
    out = tmp_path / "out.fa"
    assert main(["filter", str(tmp_path / "nope.fa"), "-o", str(out)]) == 1
    assert "No such file or directory" in capsys.readouterr().err
    assert not out.exists()


def test_malformed_input_fails(tmp_path, capsys):
    bad = tmp_path / "bad.fq"
    bad.write_text("@r\nACGT\n+\nII\n")
    assert main(["count", str(bad)]) == 1
    assert "quality length" in capsys.readouterr().err


def test_log_file(tmp_path, capsys):
    log = tmp_path / "seqr.log"
    assert main(["--log-file", str(log), "count", str(tmp_path / "nope.fa")]) == 0
    assert "WARN:" in log.read_text()
