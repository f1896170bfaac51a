# ================================================================================
# FASTA/FASTQ readers for primer panels and reads
#
# pysam.FastxFile handles FASTA, FASTQ and gzip input alike. Records are
# yielded lazily and the underlying file is closed once iteration ends.
# ================================================================================

from __future__ import annotations

import gzip
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pysam

STDIN = "-"
COMPRESSION_SUFFIXES = (".gz", ".bgz", ".bgzf")
GZIP_MAGIC = b"\x1f\x8b"
FASTX_MARKERS = (b">", b"@")


@dataclass(frozen=True)
class PrimerRecord:
    """A named primer sequence from a panel file."""

    name: str
    sequence: str


@dataclass(frozen=True)
class ReadRecord:
    """A sequencing read. Quality scores are not kept."""

    sequence: str
    name: str | None = None


class FastxFormatError(ValueError):
    """A named input file is not FASTA or FASTQ."""

    def __init__(self, path: str | Path, problem: str) -> None:
        super().__init__(f"{path} is not a FASTA/FASTQ file: {problem}")
        self.path = Path(path)


def _first_non_blank_byte(path: str | Path) -> bytes:
    with open(path, "rb") as f:
        magic = f.read(2)
    opener = gzip.open if magic == GZIP_MAGIC else open
    with opener(path, "rb") as f:
        for line in f:
            stripped = line.strip()
            if stripped:
                return stripped[:1]
    return b""


def check_fastx_header(path: str | Path) -> bytes:
    """
    Fail early on a named file whose first non-blank byte is not '>' or '@'.

    pysam skips text it cannot parse and yields no records, so without this
    check a file of garbage would be read as an empty panel or read set.
    Standard input is not checked.

    Returns:
        The first non-blank byte, or b"" for an empty file or stdin.

    Raises:
        FastxFormatError: The file has content but is not FASTA/FASTQ.
    """
    if is_stdin(path):
        return b""
    first = _first_non_blank_byte(path)
    if first and first not in FASTX_MARKERS:
        raise FastxFormatError(
            path, f"expected '>' or '@', found {first.decode('latin-1')!r}"
        )
    return first


def _iter_fastx(path: str | Path) -> Iterator:
    first = check_fastx_header(path)
    num_records = 0
    with pysam.FastxFile(str(path)) as fastx:
        for entry in fastx:
            num_records += 1
            yield entry
    if first and not num_records:
        raise FastxFormatError(path, "no records could be parsed")


def read_primer_records(path: str | Path) -> Iterator[PrimerRecord]:
    """Yield primer records from a FASTA (or FASTQ) file."""
    for entry in _iter_fastx(path):
        yield PrimerRecord(name=entry.name, sequence=entry.sequence or "")


def read_read_records(path: str | Path) -> Iterator[ReadRecord]:
    """Yield reads from a FASTQ (or FASTA) file, or standard input for ``-``."""
    for entry in _iter_fastx(path):
        yield ReadRecord(sequence=entry.sequence or "", name=entry.name)


def strip_compression_suffix(path: str | Path) -> Path:
    """Return *path* without a trailing .gz, .bgz or .bgzf suffix."""
    path = Path(path)
    if path.suffix.lower() in COMPRESSION_SUFFIXES:
        return path.with_suffix("")
    return path


def is_stdin(path: str | Path) -> bool:
    return str(path) == STDIN
