"""Filesystem writers for lattice export artifacts."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Iterable
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np

from binomial_lattice.options.types import MarketParams, PricingResult

from .constants import (
    DEFAULT_REPORT_ROOT,
    EXPORT_FORMATS,
    MANIFEST_FILENAME,
    REPORT_VERSION,
    SUMMARY_FILENAME,
    TREE_CSV_FILENAME,
    TREE_PNG_FILENAME,
)
from .plots import plot_tree
from .tables import build_settings_summary, build_tree_table
from .themes import DEFAULT_THEME

logger = logging.getLogger(__name__)

TREE_CSV_HEADER = ["Step", "State", "Stock Price", "Option Value", "Early Exercise"]


def _sanitize_name(value: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_.-]+", "_", value.strip())
    return cleaned.strip("_") or "run"


def create_run_id() -> str:
    """UTC timestamp run id, e.g. `20240131_154500`."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (np.floating, np.integer, np.bool_)):
        return obj.item()
    if isinstance(obj, Path):
        return str(obj)
    if is_dataclass(obj):
        return asdict(obj)
    raise TypeError(f"Object of type {type(obj)!r} is not JSON serializable")


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True, default=_json_default)
        handle.write("\n")


def _format_number(value: float) -> str:
    """Shortest round-tripping text for a number, integers without `.0`."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def format_tree_csv(params: MarketParams, result: PricingResult) -> str:
    """Render the sectioned CSV export: settings, CRR, results, tree data.

    Spot, strike and maturity are echoed at full precision so a run can be
    reproduced from its CSV.
    """
    crr = result.crr
    lines = [
        "SETTINGS",
        f"Spot Price,${_format_number(params.spot)}",
        f"Strike Price,${_format_number(params.strike)}",
        f"Risk-Free Rate,{params.rate * 100:.2f}%",
        f"Volatility,{params.volatility * 100:.2f}%",
        f"Time to Maturity,{_format_number(params.maturity)} years",
        f"Steps,{params.steps}",
        f"Option Type,{'Call' if params.is_call else 'Put'}",
        f"Exercise Style,{'American' if params.is_american else 'European'}",
        "",
        "CRR PARAMETERS",
        f"u,{crr.u:.6f}",
        f"d,{crr.d:.6f}",
        f"p,{crr.p:.6f}",
        f"dt,{crr.dt:.6f}",
        "",
        "RESULTS",
        f"Option Price,${result.price:.4f}",
        f"Delta,{result.delta:.4f}",
        f"Gamma,{result.gamma:.6f}",
        "",
        "TREE DATA",
    ]

    table = build_tree_table(result)
    table["early_exercise"] = table["early_exercise"].map({True: "Yes", False: "No"})
    tree_csv = table.to_csv(
        index=False,
        header=TREE_CSV_HEADER,
        float_format="%.4f",
        lineterminator="\n",
    )
    return "\n".join(lines) + "\n" + tree_csv


def write_tree_csv(
    params: MarketParams, result: PricingResult, path: str | Path
) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(format_tree_csv(params, result), encoding="utf-8")
    return p


def write_summary_json(
    params: MarketParams, result: PricingResult, path: str | Path
) -> Path:
    p = Path(path)
    _write_json(p, build_settings_summary(params, result))
    return p


def write_tree_png(
    result: PricingResult,
    path: str | Path,
    *,
    theme: str = DEFAULT_THEME,
    dpi: float = 150.0,
) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_tree(result, theme=theme)
    try:
        fig.savefig(p, dpi=dpi, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    return p


_ARTIFACT_FILENAMES = {
    "csv": TREE_CSV_FILENAME,
    "json": SUMMARY_FILENAME,
    "png": TREE_PNG_FILENAME,
}


def plan_report_artifacts(
    *,
    output_root: Path = DEFAULT_REPORT_ROOT,
    run_name: str | None = None,
    formats: Iterable[str] = EXPORT_FORMATS,
) -> dict[str, Path]:
    """Map each requested format to the path it would be written to.

    Validates `formats` without touching the filesystem; the manifest is
    listed under the `manifest` key.
    """
    requested = [str(f).strip().lower() for f in formats]
    unknown = sorted(set(requested) - set(EXPORT_FORMATS))
    if unknown:
        raise ValueError(
            f"Unknown export format(s) {unknown}; expected a subset of {EXPORT_FORMATS}"
        )

    run_dir = Path(output_root) / _sanitize_name(run_name or create_run_id())
    plan = {
        fmt: run_dir / _ARTIFACT_FILENAMES[fmt]
        for fmt in EXPORT_FORMATS
        if fmt in requested
    }
    plan["manifest"] = run_dir / MANIFEST_FILENAME
    return plan


def write_report_bundle(
    params: MarketParams,
    result: PricingResult,
    *,
    output_root: Path = DEFAULT_REPORT_ROOT,
    run_name: str | None = None,
    formats: Iterable[str] = EXPORT_FORMATS,
    theme: str = DEFAULT_THEME,
) -> Path:
    """Persist the requested exports and return the run directory path."""
    plan = plan_report_artifacts(
        output_root=output_root, run_name=run_name, formats=formats
    )
    manifest_path = plan.pop("manifest")
    run_dir = manifest_path.parent
    run_dir.mkdir(parents=True, exist_ok=True)

    for fmt, path in plan.items():
        if fmt == "csv":
            write_tree_csv(params, result, path)
        elif fmt == "json":
            write_summary_json(params, result, path)
        else:
            write_tree_png(result, path, theme=theme)

    manifest = {
        "report_version": REPORT_VERSION,
        "created_at_utc": datetime.now(timezone.utc).isoformat(),
        "theme": theme,
        "artifacts": {fmt: path.name for fmt, path in plan.items()},
    }
    _write_json(manifest_path, manifest)

    logger.info("Wrote %d artifact(s) to %s", len(plan), run_dir)
    return run_dir
