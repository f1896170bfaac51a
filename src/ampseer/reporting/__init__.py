from ampseer.reporting.summary import panel_summary, write_panel_summary

__all__ = ["panel_summary", "write_panel_summary"]
