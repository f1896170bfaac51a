"""Per-panel summary table of classification tallies."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pandas as pd
from loguru import logger

from ampseer.anchors.index import PanelIndex

SUMMARY_COLUMNS = [
    "panel",
    "anchors",
    "unique_anchors",
    "observed_anchors",
    "consistent",
    "inconsistent",
    "fraction_consistent",
]


def panel_summary(panels: list[PanelIndex]) -> pd.DataFrame:
    """One row per panel, in input order."""
    # how many panels expect each anchor
    owners = Counter(anchor for panel in panels for anchor in panel.anchors)

    rows = []
    for panel in panels:
        rows.append(
            {
                "panel": panel.name,
                "anchors": panel.num_anchors,
                "unique_anchors": sum(1 for a in panel.anchors if owners[a] == 1),
                "observed_anchors": sum(1 for c in panel.anchors.values() if c > 0),
                "consistent": panel.num_consistent_reads,
                "inconsistent": panel.num_inconsistent_reads,
                "fraction_consistent": panel.fraction_consistent,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def write_panel_summary(panels: list[PanelIndex], path: str | Path) -> Path:
    """Write the panel summary as CSV if *path* ends in .csv, else TSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sep = "," if path.suffix.lower() == ".csv" else "\t"
    panel_summary(panels).to_csv(path, sep=sep, index=False)
    logger.info(f"Panel summary saved to: {path}")
    return path
