# ================================================================================
# Read classifier
#
# One pass over the reads. Each read's leading and trailing anchors are
# checked independently against every panel, so a read adds exactly two
# observations to each panel's tallies.
# ================================================================================

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ampseer.anchors.encoding import (
    Anchor,
    InvalidNucleotideError,
    decode_anchor,
    leading_anchor,
    trailing_anchor,
)
from ampseer.anchors.index import PanelIndex
from ampseer.config import ANCHOR_LENGTH
from ampseer.logging import Reporter, default_reporter
from ampseer.utils.fastx import ReadRecord


@dataclass
class ClassificationTally:
    """Accumulator threaded through a classification pass."""

    panels: list[PanelIndex] = field(default_factory=list)
    reads_processed: int = 0
    reads_skipped: int = 0

    @property
    def reads_seen(self) -> int:
        return self.reads_processed + self.reads_skipped


def _encode_or_none(extract, sequence: str, anchor_length: int) -> Anchor | None:
    # a window with a non-ACGT base cannot be in any index
    try:
        return extract(sequence, anchor_length)
    except InvalidNucleotideError:
        return None


def read_anchors(
    sequence: str, anchor_length: int = ANCHOR_LENGTH
) -> tuple[Anchor | None, Anchor | None]:
    """Return the (leading, trailing) anchors of a read; None for unencodable ends."""
    return (
        _encode_or_none(leading_anchor, sequence, anchor_length),
        _encode_or_none(trailing_anchor, sequence, anchor_length),
    )


def _describe(anchor: Anchor | None, anchor_length: int) -> str:
    return "-" if anchor is None else decode_anchor(anchor, anchor_length)


def classify_read(
    read: ReadRecord,
    tally: ClassificationTally,
    anchor_length: int = ANCHOR_LENGTH,
    reporter: Reporter | None = None,
) -> bool:
    """
    Count one read against every panel in *tally*.

    Returns False if the read was too short to carry an anchor and was skipped.
    """
    reporter = default_reporter(reporter, "classify")
    sequence = read.sequence
    label = read.name or str(tally.reads_seen + 1)

    if len(sequence) < anchor_length:
        tally.reads_skipped += 1
        reporter.report(
            "WARNING",
            f"Skipping read {label}: "
            f"{len(sequence)} bases is shorter than the {anchor_length}-base anchor",
        )
        return False

    left, right = read_anchors(sequence, anchor_length)
    reporter.report(
        "DEBUG",
        f"read {label}: left {_describe(left, anchor_length)} "
        f"right {_describe(right, anchor_length)}",
    )

    for panel in tally.panels:
        panel.record(left)
        panel.record(right)
        panel.update_fraction()

    tally.reads_processed += 1
    return True


def classify_reads(
    reads: Iterable[ReadRecord],
    panels: list[PanelIndex],
    anchor_length: int = ANCHOR_LENGTH,
    reporter: Reporter | None = None,
) -> ClassificationTally:
    """
    Tally the boundary anchors of every read against every panel.

    Short reads are skipped with a warning and processing continues.
    Panels are mutated in place and returned inside the tally.

    Parameters
    ----------
    reads : Iterable[ReadRecord]
        Single-pass read stream, consumed in order.
    panels : list[PanelIndex]
        Panel indices built by ``build_panel_index``.
    anchor_length : int
        Length of the leading/trailing window.
    reporter : Reporter | None
        Diagnostics sink; defaults to loguru.

    Returns
    -------
    ClassificationTally
        Read counters plus the updated panels.
    """
    reporter = default_reporter(reporter, "classify")
    tally = ClassificationTally(panels=panels)

    for read in reads:
        classify_read(read, tally, anchor_length=anchor_length, reporter=reporter)

    reporter.report(
        "INFO",
        f"Classified {tally.reads_processed} reads "
        f"({tally.reads_skipped} skipped as too short)",
    )
    for panel in panels:
        reporter.report(
            "INFO",
            f"{panel.name}: {panel.num_consistent_reads} consistent, "
            f"{panel.num_inconsistent_reads} inconsistent",
        )
    return tally
