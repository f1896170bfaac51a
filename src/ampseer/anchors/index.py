# ================================================================================
# Panel anchor index
#
# A PanelIndex holds every anchor a panel's primers can leave at the start
# or end of a read, in both orientations, with an observation count that
# the read classifier fills in.
# ================================================================================

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ampseer.anchors.encoding import (
    Anchor,
    decode_anchor,
    leading_anchor,
    reverse_complement_anchor,
    trailing_anchor,
)
from ampseer.config import ANCHOR_LENGTH
from ampseer.logging import Reporter, default_reporter
from ampseer.utils.fastx import PrimerRecord, read_primer_records, strip_compression_suffix


class PrimerFormatError(ValueError):
    """A primer record cannot be turned into an anchor."""

    def __init__(self, record_name: str, message: str) -> None:
        super().__init__(message)
        self.record_name = record_name


class UnrecognizedOrientationError(PrimerFormatError):
    """The primer name says neither 'left' nor 'right'."""

    def __init__(self, record_name: str) -> None:
        super().__init__(
            record_name,
            f"Primer '{record_name}' has no 'left' or 'right' orientation in its name",
        )


class PrimerTooShortError(PrimerFormatError):
    """The primer sequence is shorter than the anchor length."""

    def __init__(self, record_name: str, length: int, anchor_length: int) -> None:
        super().__init__(
            record_name,
            f"Primer '{record_name}' is {length} bases long; "
            f"at least {anchor_length} are required",
        )
        self.length = length
        self.anchor_length = anchor_length


@dataclass
class PanelIndex:
    """
    Expected anchors of one candidate primer panel and their observed counts.

    Args:
        name: Panel name, taken from the primer file's base name
        anchors: Anchor -> number of read ends that carried it
        num_consistent_reads: Read ends whose anchor is in ``anchors``
        num_inconsistent_reads: Read ends whose anchor is not
        fraction_consistent: consistent / (consistent + inconsistent),
            kept current by the classifier
    """

    name: str
    anchors: dict[Anchor, int] = field(default_factory=dict, repr=False)
    num_consistent_reads: int = 0
    num_inconsistent_reads: int = 0
    fraction_consistent: float = 0.0

    @property
    def num_observations(self) -> int:
        return self.num_consistent_reads + self.num_inconsistent_reads

    @property
    def num_anchors(self) -> int:
        return len(self.anchors)

    def record(self, anchor: Anchor | None) -> bool:
        """Count one read end against this panel. Returns True if recognized."""
        if anchor is not None and anchor in self.anchors:
            self.anchors[anchor] += 1
            self.num_consistent_reads += 1
            return True
        self.num_inconsistent_reads += 1
        return False

    def update_fraction(self) -> float:
        if self.num_observations:
            self.fraction_consistent = self.num_consistent_reads / self.num_observations
        return self.fraction_consistent

    def unique_anchors(self, other: PanelIndex) -> set[Anchor]:
        """Anchors of this panel that *other* does not expect."""
        return self.anchors.keys() - other.anchors.keys()

    def observed_count(self, anchors: Iterable[Anchor]) -> int:
        """Sum of counts over *anchors*; anchors this panel lacks count as 0."""
        return sum(self.anchors.get(anchor, 0) for anchor in anchors)


def primer_anchor(record: PrimerRecord, anchor_length: int = ANCHOR_LENGTH) -> Anchor:
    """
    Pick the anchor a primer contributes to its panel's index.

    LEFT primers anchor on their first bases, RIGHT primers on their last.
    The orientation is read from the record name, case-insensitively.
    """
    name = record.name.lower()
    if "left" in name:
        extract = leading_anchor
    elif "right" in name:
        extract = trailing_anchor
    else:
        raise UnrecognizedOrientationError(record.name)

    if len(record.sequence) < anchor_length:
        raise PrimerTooShortError(record.name, len(record.sequence), anchor_length)

    return extract(record.sequence, anchor_length)


def build_panel_index(
    name: str,
    primers: Iterable[PrimerRecord],
    anchor_length: int = ANCHOR_LENGTH,
    reporter: Reporter | None = None,
) -> PanelIndex:
    """
    Build the anchor index for one panel.

    Both the anchor and its reverse complement are inserted at count 0 so
    reads from either strand can match. An anchor already present is
    reported as ambiguous and keeps its existing entry.

    Raises:
        UnrecognizedOrientationError: A primer name has no left/right marker.
        PrimerTooShortError: A primer is shorter than ``anchor_length``.
    """
    reporter = default_reporter(reporter, "anchors.index")
    panel = PanelIndex(name=name)
    num_primers = 0

    for record in primers:
        num_primers += 1
        forward = primer_anchor(record, anchor_length)
        reverse = reverse_complement_anchor(forward, anchor_length)
        reporter.report(
            "DEBUG",
            f"{name}: {record.name} anchor {decode_anchor(forward, anchor_length)} "
            f"reverse complement {decode_anchor(reverse, anchor_length)}",
        )

        # a reverse-complement palindrome yields one key, not a clash
        for anchor in dict.fromkeys((forward, reverse)):
            if anchor in panel.anchors:
                reporter.report(
                    "WARNING",
                    f"{name}: ambiguous primer {record.name}, anchor "
                    f"{decode_anchor(anchor, anchor_length)} is already indexed",
                )
                continue
            panel.anchors[anchor] = 0

    reporter.report(
        "INFO",
        f"Loaded panel {name}: {num_primers} primers, {panel.num_anchors} anchors",
    )
    return panel


def panel_name_from_path(path: str | Path) -> str:
    """Base name of a primer file without its extension(s)."""
    return strip_compression_suffix(path).stem


def load_panel_index(
    path: str | Path,
    anchor_length: int = ANCHOR_LENGTH,
    reporter: Reporter | None = None,
) -> PanelIndex:
    """Read a primer FASTA file and build its panel index."""
    return build_panel_index(
        panel_name_from_path(path),
        read_primer_records(path),
        anchor_length=anchor_length,
        reporter=reporter,
    )
