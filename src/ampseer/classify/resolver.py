# ================================================================================
# Panel resolver
#
# Stage 1 ranks panels by the fraction of read ends they recognize. When the
# leader does not dominate, stage 2 compares the two panels with the most
# consistent read ends using only the anchors each has and the other lacks.
# ================================================================================

from __future__ import annotations

import math
from dataclasses import dataclass

from ampseer.anchors.index import PanelIndex
from ampseer.config import EXPECTED_NON_MATCHING_RATIO, ClassifierConfig
from ampseer.logging import Reporter, default_reporter

DEFAULT_PANEL = "unknown"


@dataclass(frozen=True)
class Verdict:
    """Name of the panel that explains the reads, or ``unknown``."""

    panel_name: str
    confidence: float = 0.0

    @property
    def is_unknown(self) -> bool:
        return self.panel_name == DEFAULT_PANEL

    def __str__(self) -> str:
        return f"{self.panel_name}\t{self.confidence:.2f}"


UNKNOWN = Verdict(DEFAULT_PANEL, 0.0)


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, with x/0 = inf for x > 0 and 0/0 = nan."""
    if denominator == 0:
        return math.inf if numerator > 0 else math.nan
    return numerator / denominator


def rank_panels(panels: list[PanelIndex]) -> list[tuple[str, float]]:
    """(name, fraction_consistent) pairs, best first. Ties keep input order."""
    pairs = [(panel.name, panel.fraction_consistent) for panel in panels]
    return sorted(pairs, key=lambda pair: pair[1], reverse=True)


def _top_two_by_consistent(
    panels: list[PanelIndex],
) -> tuple[PanelIndex, PanelIndex]:
    top = max(panels, key=lambda panel: panel.num_consistent_reads)
    rest = [panel for panel in panels if panel is not top]
    second = max(rest, key=lambda panel: panel.num_consistent_reads)
    return top, second


def compare_only_unique_primers(
    panels: list[PanelIndex],
    config: ClassifierConfig | None = None,
    reporter: Reporter | None = None,
) -> Verdict:
    """
    Decide between the two panels with the most consistent read ends.

    Only anchors that one of the two panels has and the other lacks are
    counted, so shared primers cannot mask which panel was used. The
    confidence of a stage-2 verdict is not modelled and stays 0.0.
    """
    config = config or ClassifierConfig()
    reporter = default_reporter(reporter, "resolver")

    if len(panels) < 2:
        return UNKNOWN

    top, second = _top_two_by_consistent(panels)
    top_unique = top.unique_anchors(second)
    second_unique = second.unique_anchors(top)
    unique = top_unique | second_unique

    uniq_top_count = top.observed_count(unique)
    uniq_second_count = second.observed_count(unique)
    threshold = config.unique_anchor_threshold

    reporter.report(
        "INFO",
        f"Comparing unique anchors: {top.name} has {len(top_unique)} "
        f"({uniq_top_count} observed), {second.name} has {len(second_unique)} "
        f"({uniq_second_count} observed)",
    )

    # no unique evidence for second counts as an infinite ratio, even at 0/0
    if uniq_second_count == 0:
        return Verdict(top.name, 0.0)
    count_ratio = uniq_top_count / uniq_second_count
    if count_ratio > threshold:
        return Verdict(top.name, 0.0)
    if count_ratio == 0 or 1 / count_ratio > threshold:
        return Verdict(second.name, 0.0)
    return UNKNOWN


def resolve_panels(
    panels: list[PanelIndex],
    config: ClassifierConfig | None = None,
    reporter: Reporter | None = None,
) -> Verdict:
    """
    Pick the panel that best explains the classified reads.

    Parameters
    ----------
    panels : list[PanelIndex]
        Tallied panels, in the order they were given on input.
    config : ClassifierConfig | None
        Thresholds; defaults to ``ClassifierConfig()``.
    reporter : Reporter | None
        Diagnostics sink; defaults to loguru.

    Returns
    -------
    Verdict
        The winning panel, or ``unknown`` with confidence 0.0.
    """
    config = config or ClassifierConfig()
    reporter = default_reporter(reporter, "resolver")
    background = config.expected_non_matching_ratio

    if not panels:
        return UNKNOWN
    if not any(panel.num_observations for panel in panels):
        reporter.report("WARNING", "No reads were classified; cannot pick a panel")
        return UNKNOWN

    ranked = rank_panels(panels)
    for name, fraction in ranked:
        reporter.report("INFO", f"{name}: fraction consistent {fraction:.6f}")

    if len(ranked) == 1:
        name, fraction = ranked[0]
        if fraction >= background:
            return Verdict(name, fraction / background)
        return UNKNOWN

    (top_name, top_fraction), (_, second_fraction) = ranked[0], ranked[1]
    ratio = _ratio(top_fraction, second_fraction)
    if ratio > config.dominance_threshold:
        return Verdict(top_name, ratio)

    reporter.report(
        "INFO",
        "Top panels are too close to call by fraction; comparing unique anchors",
    )
    return compare_only_unique_primers(panels, config=config, reporter=reporter)


__all__ = [
    "DEFAULT_PANEL",
    "EXPECTED_NON_MATCHING_RATIO",
    "UNKNOWN",
    "Verdict",
    "compare_only_unique_primers",
    "rank_panels",
    "resolve_panels",
]
