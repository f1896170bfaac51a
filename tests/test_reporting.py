# ================================================================================
# Tests for the panel summary table and the logging sink
# ================================================================================

import pandas as pd
from loguru import logger

from ampseer.anchors.index import PanelIndex
from ampseer.logging import (
    LoguruReporter,
    configure_file_logging,
    configure_logging,
    default_reporter,
    level_for_verbosity,
)
from ampseer.reporting.summary import SUMMARY_COLUMNS, panel_summary, write_panel_summary


def sample_panels():
    a = PanelIndex(name="a", anchors={1: 3, 2: 0, 3: 1}, num_consistent_reads=4,
                   num_inconsistent_reads=6)
    b = PanelIndex(name="b", anchors={1: 2, 4: 0}, num_consistent_reads=2,
                   num_inconsistent_reads=8)
    for panel in (a, b):
        panel.update_fraction()
    return [a, b]


class TestPanelSummary:
    def test_columns_and_rows(self):
        df = panel_summary(sample_panels())
        assert list(df.columns) == SUMMARY_COLUMNS
        assert list(df["panel"]) == ["a", "b"]

    def test_values(self):
        df = panel_summary(sample_panels()).set_index("panel")
        assert df.loc["a", "anchors"] == 3
        assert df.loc["a", "unique_anchors"] == 2
        assert df.loc["b", "unique_anchors"] == 1
        assert df.loc["a", "observed_anchors"] == 2
        assert df.loc["b", "consistent"] == 2
        assert df.loc["b", "inconsistent"] == 8
        assert df.loc["a", "fraction_consistent"] == 0.4

    def test_empty(self):
        df = panel_summary([])
        assert df.empty
        assert list(df.columns) == SUMMARY_COLUMNS

    def test_write_tsv(self, tmp_path):
        path = write_panel_summary(sample_panels(), tmp_path / "out" / "panels.tsv")
        df = pd.read_csv(path, sep="\t")
        assert list(df["panel"]) == ["a", "b"]

    def test_write_csv(self, tmp_path):
        path = write_panel_summary(sample_panels(), tmp_path / "panels.csv")
        df = pd.read_csv(path)
        assert df["consistent"].tolist() == [4, 2]


class TestLogging:
    def test_level_for_verbosity(self):
        assert level_for_verbosity(0) == "WARNING"
        assert level_for_verbosity(1) == "INFO"
        assert level_for_verbosity(2) == "DEBUG"
        assert level_for_verbosity(5) == "DEBUG"

    def test_configure_logging_returns_level(self):
        assert configure_logging(1) == "INFO"

    def test_loguru_reporter_forwards(self):
        messages = []
        logger.add(messages.append, format="{extra[component]}|{level}|{message}")
        LoguruReporter("anchors.index").report("WARNING", "ambiguous primer x")
        assert messages[-1].strip() == "anchors.index|WARNING|ambiguous primer x"

    def test_child_reporter(self):
        assert LoguruReporter("ampseer").child("classify").component == "ampseer.classify"

    def test_default_reporter(self, reporter):
        assert default_reporter(reporter, "x") is reporter
        assert isinstance(default_reporter(None, "x"), LoguruReporter)

    def test_file_logging(self, tmp_path):
        path = configure_file_logging(tmp_path / "logs")
        LoguruReporter("test").report("DEBUG", "written to file")
        logger.complete()
        assert path.exists()
        assert "written to file" in path.read_text()
