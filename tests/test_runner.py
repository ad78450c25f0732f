import csv
import io
import json
from pathlib import Path

import pytest

from fincalc.config import irr_config_from, load_config
from fincalc.finance.irr import DEFAULT_CONFIG, IRRConfig
from fincalc.runner import evaluate, run_dir, run_file, run_params

DEMO = Path(__file__).resolve().parents[1] / "fincalc" / "inputs" / "demo.yaml"


def test_load_config_from_stream():
    cfg = load_config(io.StringIO("irr: {guess: 0.2}\ncalculations: []\n"))
    assert cfg == {"irr": {"guess": 0.2}, "calculations": []}


def test_load_config_empty_document_is_empty_mapping():
    assert load_config(io.StringIO("")) == {}


def test_load_config_rejects_non_mapping():
    with pytest.raises(SystemExit):
        load_config(io.StringIO("- 1\n- 2\n"))


def test_irr_config_from_section_falls_back_to_base():
    assert irr_config_from(None) == DEFAULT_CONFIG
    cfg = irr_config_from({"tolerance": 1e-9})
    assert cfg == IRRConfig(guess=0.1, tolerance=1e-9, max_iterations=1000)
    base = IRRConfig(guess=0.3)
    assert irr_config_from({"max_iterations": 5}, base=base).guess == 0.3


def test_irr_config_from_bad_values_exits():
    with pytest.raises(SystemExit):
        irr_config_from({"tolerance": 0})


@pytest.mark.parametrize("count", [2.5, "many", None, 0])
def test_irr_config_from_rejects_non_integral_iteration_counts(count):
    with pytest.raises(SystemExit, match="invalid irr settings"):
        irr_config_from({"max_iterations": count})


def test_evaluate_per_calculation_irr_override():
    flows = [-1000.0, 300.0, 400.0, 500.0, 600.0]
    out = evaluate({"kind": "irr", "cashflows": flows, "max_iterations": 1}, DEFAULT_CONFIG)
    assert out.error is not None
    assert evaluate({"kind": "irr", "cashflows": flows}, DEFAULT_CONFIG).ok


def test_run_params_keeps_order_and_counts_failures():
    summary = run_params(load_config(DEMO))
    names = [r["name"] for r in summary["results"]]
    assert names[0] == "fv_1000_at_5pct_10y"
    assert names[-1] == "irr_all_outflows"
    assert summary["count"] == 7
    assert summary["failed"] == 1
    failed = summary["results"][-1]
    assert failed["ok"] is False
    assert failed["value"] is None
    assert failed["error"] == "invalid_argument"


def test_run_params_default_names():
    summary = run_params({"calculations": [{"kind": "simple_interest", "principal": 1, "rate": 0.1, "time": 2}]})
    assert summary["results"][0]["name"] == "calc_0"
    assert summary["results"][0]["value"] == pytest.approx(0.2)


def test_run_file_writes_summary_and_csv(tmp_path, monkeypatch):
    monkeypatch.setenv("VALIDATION_MODE", "relaxed")
    res = run_file(DEMO, tmp_path, fmt="csv")
    summary = json.loads(res.summary_path.read_text(encoding="utf-8"))
    assert summary["count"] == 7

    with res.results_path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["name"] for r in rows] == [r["name"] for r in summary["results"]]
    assert rows[0]["value"].startswith("1628.89")
    assert rows[-1]["value"] == ""
    assert rows[-1]["error"] == "invalid_argument"


def test_run_file_jsonl(tmp_path):
    res = run_file(DEMO, tmp_path, fmt="jsonl", mode="strict")
    lines = res.results_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 7
    assert json.loads(lines[5])["kind"] == "irr"


def test_run_file_unknown_format(tmp_path):
    with pytest.raises(SystemExit):
        run_file(DEMO, tmp_path, fmt="xlsx")


def test_run_file_json_batch(tmp_path):
    cfg = tmp_path / "batch.json"
    cfg.write_text('{"calculations": [{"kind": "simple_interest", "principal": 5000, "rate": 0.06, "time": 3}]}', encoding="utf-8")
    res = run_file(cfg, tmp_path / "out", mode="relaxed")
    assert res.summary["results"][0]["value"] == pytest.approx(900.0)


@pytest.mark.parametrize("text", ["[1, 2]", "\"calculations\"", "3"])
def test_run_file_json_top_level_must_be_a_mapping(tmp_path, text):
    cfg = tmp_path / "batch.json"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(SystemExit, match="batch file must be a mapping"):
        run_file(cfg, tmp_path / "out", mode="relaxed")


def test_run_dir_runs_every_batch_file(tmp_path, monkeypatch):
    monkeypatch.setenv("VALIDATION_MODE", "relaxed")
    src = tmp_path / "batches"
    src.mkdir()
    (src / "a.yaml").write_text(DEMO.read_text(encoding="utf-8"), encoding="utf-8")
    (src / "b.yml").write_text(
        "calculations:\n  - {kind: npv, rate: 0.1, cashflows: []}\n", encoding="utf-8"
    )
    res = run_dir(src, tmp_path / "out")
    assert set(res) == {"a.yaml", "b.yml"}
    assert (tmp_path / "out" / "a" / "summary.json").exists()
    assert res["b.yml"].summary["results"][0]["value"] == 0.0


def test_run_dir_empty_directory(tmp_path):
    with pytest.raises(SystemExit):
        run_dir(tmp_path, tmp_path / "out")
