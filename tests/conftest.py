"""Shared pytest fixtures: small primer panels, reads and a recording reporter."""

from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from ampseer.anchors.encoding import reverse_complement

# Two panels sharing amplicon 1; amplicon 2 differs between them.
V3_PRIMERS = {
    "v3_1_LEFT": "GACCCCAAAATCAGCGAAATG",
    "v3_1_RIGHT": "TGGTTACTGCCAGTTGAATCTG",
    "v3_2_LEFT": "TTCGGATGCTCGAACTGCACC",
    "v3_2_RIGHT": "CACATCTTCAGGAAGCTTTGCGTA",
}
V4_PRIMERS = {
    "v4_1_LEFT": "GACCCCAAAATCAGCGAAATG",
    "v4_1_RIGHT": "TGGTTACTGCCAGTTGAATCTG",
    "v4_2_LEFT": "AGGTGGCAGACCTCTTAGGTACA",
    "v4_2_RIGHT": "GTCTGAGCATTGTATAACTCCGAG",
}
UNRELATED_PRIMERS = {
    "x_1_left": "CCATAGGCTTAGCCTTAGGCAT",
    "x_1_right": "GGCATTTCAGGACCTAGTTCAA",
}
FILLER = "TTGACCGATTGCAATCGGAA"


class RecordingReporter:
    """Reporter that keeps every diagnostic for later assertions.

    Children share the parent's event lists, so one fixture sees the
    diagnostics of every component a test drives.
    """

    def __init__(self, component: str = "ampseer", parent=None) -> None:
        self.component = component
        self.events: list[tuple[str, str]] = parent.events if parent else []
        self.tagged: list[tuple[str, str, str]] = parent.tagged if parent else []

    def report(self, level: str, message: str) -> None:
        self.events.append((level, message))
        self.tagged.append((self.component, level, message))

    def child(self, component: str) -> RecordingReporter:
        return RecordingReporter(f"{self.component}.{component}", parent=self)

    def components(self) -> set[str]:
        return {component for component, _, _ in self.tagged}

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.events if lvl == level]


def amplicon_read(left_primer: str, right_primer: str, filler: str = FILLER) -> str:
    """A read starting with the left anchor and ending with the reverse
    complement of the right anchor."""
    return left_primer[:16] + filler + reverse_complement(right_primer[-16:])


def write_fasta(path: Path, records: dict[str, str]) -> Path:
    path.write_text("".join(f">{name}\n{seq}\n" for name, seq in records.items()))
    return path


def write_fastq(path: Path, sequences: list[str]) -> Path:
    path.write_text(
        "".join(
            f"@read{i}\n{seq}\n+\n{'I' * len(seq)}\n"
            for i, seq in enumerate(sequences, start=1)
        )
    )
    return path


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop handlers added during a test so they never outlive captured streams."""
    yield
    logger.remove()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def v3_fasta(tmp_path) -> Path:
    return write_fasta(tmp_path / "artic_v3.fasta", V3_PRIMERS)


@pytest.fixture
def v4_fasta(tmp_path) -> Path:
    return write_fasta(tmp_path / "artic_v4.fasta", V4_PRIMERS)


@pytest.fixture
def unrelated_fasta(tmp_path) -> Path:
    return write_fasta(tmp_path / "unrelated.fasta", UNRELATED_PRIMERS)


@pytest.fixture
def v4_reads(tmp_path) -> Path:
    """Reads from both v4 amplicons, in both orientations, plus one short read."""
    amp1 = amplicon_read(V4_PRIMERS["v4_1_LEFT"], V4_PRIMERS["v4_1_RIGHT"])
    amp2 = amplicon_read(V4_PRIMERS["v4_2_LEFT"], V4_PRIMERS["v4_2_RIGHT"])
    sequences = [amp1, amp2, reverse_complement(amp2), amp2, "ACGTACGT", amp1]
    return write_fastq(tmp_path / "reads.fastq", sequences)
