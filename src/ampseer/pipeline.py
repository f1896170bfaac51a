# ================================================================================
# Classification pipeline
#
# This module runs the complete panel identification workflow:
#   1. Validate that every input exists
#   2. Build one anchor index per primer panel, in input order
#   3. Classify the reads against all panels in a single pass
#   4. Resolve the tallies into a verdict
# ================================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ampseer.anchors.index import PanelIndex, load_panel_index
from ampseer.classify.classifier import ClassificationTally, classify_reads
from ampseer.classify.resolver import Verdict, resolve_panels
from ampseer.config import ClassifierConfig
from ampseer.logging import LoguruReporter, Reporter
from ampseer.utils.fastx import is_stdin, read_read_records


@dataclass
class ClassificationResult:
    """Result of running the classification pipeline."""

    verdict: Verdict
    panels: list[PanelIndex] = field(default_factory=list)
    tally: ClassificationTally | None = None

    @property
    def panel_names(self) -> list[str]:
        return [panel.name for panel in self.panels]

    def summary_dict(self) -> dict:
        """Return a JSON-serializable summary of the run."""
        return {
            "panel_name": self.verdict.panel_name,
            "confidence": self.verdict.confidence,
            "reads_processed": self.tally.reads_processed if self.tally else 0,
            "reads_skipped": self.tally.reads_skipped if self.tally else 0,
            "per_panel": {
                panel.name: {
                    "anchors": panel.num_anchors,
                    "consistent": panel.num_consistent_reads,
                    "inconsistent": panel.num_inconsistent_reads,
                    "fraction_consistent": panel.fraction_consistent,
                }
                for panel in self.panels
            },
        }


def check_inputs(reads: str | Path, primer_sets: list[str | Path]) -> None:
    """
    Verify that every input file exists before any parsing starts.

    Raises
    ------
    FileNotFoundError
        Listing every missing path at once.
    """
    error_messages = []
    if not primer_sets:
        error_messages.append("No primer sets were given")
    for primer_set in primer_sets:
        if not Path(primer_set).exists():
            error_messages.append(f"Could not find primer set at {primer_set}")
    if not is_stdin(reads) and not Path(reads).exists():
        error_messages.append(f"Could not find reads at {reads}")

    if error_messages:
        raise FileNotFoundError("\n".join(error_messages))


def build_panels(
    primer_sets: list[str | Path],
    config: ClassifierConfig,
    reporter: Reporter,
) -> list[PanelIndex]:
    """Build one panel index per primer file, preserving input order."""
    return [
        load_panel_index(path, anchor_length=config.anchor_length, reporter=reporter)
        for path in primer_sets
    ]


def run_classification(
    reads: str | Path,
    primer_sets: list[str | Path],
    config: ClassifierConfig | None = None,
    reporter: Reporter | None = None,
) -> ClassificationResult:
    """
    Identify which primer panel generated a set of reads.

    Parameters
    ----------
    reads : str | Path
        FASTQ/FASTA file of reads, optionally gzipped, or ``-`` for stdin.
    primer_sets : list[str | Path]
        One primer FASTA file per candidate panel.
    config : ClassifierConfig | None
        Anchor length and resolution thresholds.
    reporter : Reporter | None
        Diagnostics sink; defaults to loguru.

    Returns
    -------
    ClassificationResult
        Verdict plus the tallied panels.

    Raises
    ------
    FileNotFoundError
        If any input is missing.
    PrimerFormatError
        If a primer record has no orientation or is too short.
    FastxFormatError
        If a primer or reads file is not FASTA/FASTQ.
    """
    config = config or ClassifierConfig()
    reporter = reporter or LoguruReporter()
    log = reporter.child("pipeline")

    check_inputs(reads, primer_sets)
    log.report(
        "INFO",
        f"Searching for primers from {[str(p) for p in primer_sets]} "
        f"in reads from {reads}",
    )

    panels = build_panels(primer_sets, config, reporter.child("anchors"))
    tally = classify_reads(
        read_read_records(reads),
        panels,
        anchor_length=config.anchor_length,
        reporter=reporter.child("classify"),
    )
    verdict = resolve_panels(
        panels, config=config, reporter=reporter.child("resolver")
    )
    log.report("INFO", f"Verdict: {verdict.panel_name} ({verdict.confidence})")

    return ClassificationResult(verdict=verdict, panels=panels, tally=tally)
