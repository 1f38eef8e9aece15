import json
from dataclasses import replace

import pytest

from binomial_lattice.options import ExerciseStyle, MarketParams, OptionType, price_lattice
from binomial_lattice.reporting import (
    build_settings_summary,
    build_tree_table,
    format_tree_csv,
    plan_report_artifacts,
    write_report_bundle,
)


def _american_put() -> MarketParams:
    return MarketParams(
        spot=100.0,
        strike=110.0,
        rate=0.05,
        volatility=0.3,
        maturity=1.0,
        steps=3,
        option_type=OptionType.PUT,
        exercise=ExerciseStyle.AMERICAN,
    )


def test_build_tree_table_has_one_row_per_node():
    params = _american_put()
    result = price_lattice(params)

    table = build_tree_table(result)

    assert list(table.columns) == [
        "step",
        "state",
        "stock_price",
        "option_value",
        "early_exercise",
    ]
    assert len(table) == 10
    assert table.iloc[0]["stock_price"] == pytest.approx(100.0)
    assert table.iloc[0]["option_value"] == pytest.approx(result.price)
    flagged = table.loc[table["early_exercise"], ["step", "state"]]
    assert [tuple(row) for row in flagged.to_numpy()] == [(1, 0), (2, 0)]


def test_build_settings_summary_is_json_serializable():
    params = _american_put()
    result = price_lattice(params)

    summary = build_settings_summary(params, result)

    assert summary["settings"]["option_type"] == "put"
    assert summary["settings"]["exercise"] == "american"
    assert summary["crr"]["u"] == pytest.approx(result.crr.u)
    assert summary["results"]["price"] == pytest.approx(result.price)
    assert len(summary["early_exercise_nodes"]) == 2
    json.dumps(summary)


def test_format_tree_csv_sections_and_rows():
    params = _american_put()
    result = price_lattice(params)

    text = format_tree_csv(params, result)
    lines = text.splitlines()

    assert lines[:3] == ["SETTINGS", "Spot Price,$100", "Strike Price,$110"]
    assert "Risk-Free Rate,5.00%" in lines
    assert "Volatility,30.00%" in lines
    assert "Option Type,Put" in lines
    assert "Exercise Style,American" in lines
    assert f"u,{result.crr.u:.6f}" in lines
    assert f"Option Price,${result.price:.4f}" in lines

    tree_start = lines.index("TREE DATA")
    assert lines[tree_start + 1] == "Step,State,Stock Price,Option Value,Early Exercise"
    rows = lines[tree_start + 2 :]
    assert len(rows) == 10
    assert rows[0].startswith("0,0,100.0000,")
    assert sum(row.endswith(",Yes") for row in rows) == 2


def test_write_report_bundle_writes_requested_artifacts(tmp_path):
    params = _american_put()
    result = price_lattice(params)

    run_dir = write_report_bundle(
        params,
        result,
        output_root=tmp_path,
        run_name="unit test run",
        formats=["csv", "json", "png"],
        theme="midnight",
    )

    assert run_dir == tmp_path / "unit_test_run"
    assert (run_dir / "binomial-tree-data.csv").exists()
    assert (run_dir / "summary.json").exists()
    assert (run_dir / "binomial-tree.png").stat().st_size > 0

    manifest = json.loads((run_dir / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["theme"] == "midnight"
    assert set(manifest["artifacts"]) == {"csv", "json", "png"}


def test_write_report_bundle_rejects_unknown_format(tmp_path):
    params = _american_put()
    result = price_lattice(params)

    with pytest.raises(ValueError, match="Unknown export format"):
        write_report_bundle(params, result, output_root=tmp_path, formats=["xlsx"])
    assert not any(tmp_path.iterdir())


def test_format_tree_csv_echoes_inputs_at_full_precision():
    params = replace(_american_put(), spot=101.25, maturity=1 / 12)
    result = price_lattice(params)

    lines = format_tree_csv(params, result).splitlines()

    assert "Spot Price,$101.25" in lines
    assert "Strike Price,$110" in lines
    assert "Time to Maturity,0.08333333333333333 years" in lines


def test_plan_report_artifacts_lists_paths_without_writing(tmp_path):
    plan = plan_report_artifacts(
        output_root=tmp_path / "out",
        run_name="dry run",
        formats=["PNG", "csv"],
    )

    run_dir = tmp_path / "out" / "dry_run"
    assert plan == {
        "csv": run_dir / "binomial-tree-data.csv",
        "png": run_dir / "binomial-tree.png",
        "manifest": run_dir / "manifest.json",
    }
    assert not (tmp_path / "out").exists()


def test_plan_report_artifacts_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError, match="Unknown export format"):
        plan_report_artifacts(output_root=tmp_path, formats=["csv", "pdf"])


def test_default_report_root_lives_under_project_output():
    from binomial_lattice.config import paths
    from binomial_lattice.reporting import DEFAULT_REPORT_ROOT

    assert DEFAULT_REPORT_ROOT == paths.TREE_EXPORTS_ROOT
    assert DEFAULT_REPORT_ROOT.parent == paths.OUTPUT_ROOT
    assert paths.OUTPUT_ROOT.parent == paths.ROOT
