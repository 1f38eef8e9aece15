"""Exporters and renderers for lattice pricing results."""

from .constants import DEFAULT_REPORT_ROOT, EXPORT_FORMATS
from .plots import compute_node_positions, plot_tree
from .tables import build_settings_summary, build_tree_table
from .themes import DEFAULT_THEME, TREE_THEMES, TreeTheme, get_tree_theme
from .writers import (
    create_run_id,
    format_tree_csv,
    plan_report_artifacts,
    write_report_bundle,
    write_summary_json,
    write_tree_csv,
    write_tree_png,
)

__all__ = [
    "DEFAULT_REPORT_ROOT",
    "EXPORT_FORMATS",
    "DEFAULT_THEME",
    "TREE_THEMES",
    "TreeTheme",
    "get_tree_theme",
    "build_tree_table",
    "build_settings_summary",
    "compute_node_positions",
    "plot_tree",
    "create_run_id",
    "format_tree_csv",
    "plan_report_artifacts",
    "write_tree_csv",
    "write_summary_json",
    "write_tree_png",
    "write_report_bundle",
]
