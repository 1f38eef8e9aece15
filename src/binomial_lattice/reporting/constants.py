"""Constants for lattice export artifacts."""

from __future__ import annotations

from binomial_lattice.config.paths import TREE_EXPORTS_ROOT

REPORT_VERSION = "1.0.0"

DEFAULT_REPORT_ROOT = TREE_EXPORTS_ROOT

TREE_CSV_FILENAME = "binomial-tree-data.csv"
SUMMARY_FILENAME = "summary.json"
TREE_PNG_FILENAME = "binomial-tree.png"
MANIFEST_FILENAME = "manifest.json"

EXPORT_FORMATS = ("csv", "json", "png")

TREE_COLUMNS = ["step", "state", "stock_price", "option_value", "early_exercise"]
