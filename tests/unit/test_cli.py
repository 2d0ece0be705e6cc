"""Tests for the medinsight CLI."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from medinsight.cli.main import app

runner = CliRunner()


class TestClassifyCommand:
    def test_json_output(self):
        result = runner.invoke(app, ["classify", "--file-name", "CBC_Report_JohnDoe.pdf", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["category"] == "Blood Test"
        assert "cbc" in payload["detectedKeywords"]

    def test_rich_output(self):
        result = runner.invoke(app, ["classify", "--title", "Hospital Discharge Summary"])
        assert result.exit_code == 0
        assert "Discharge Summary" in result.stdout


class TestSuggestCommand:
    def test_json(self):
        result = runner.invoke(app, ["suggest", "chest x-ray", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["category"] == "X-Ray"

    def test_blank_text_exits_1(self):
        result = runner.invoke(app, ["suggest", "   "])
        assert result.exit_code == 1


class TestBatchCommand:
    def test_writes_output(self, tmp_path):
        records = tmp_path / "records.json"
        records.write_text(json.dumps([{"_id": "a", "fileName": "cbc.pdf"}, {"_id": "b"}]), encoding="utf-8")
        out = tmp_path / "out.json"
        result = runner.invoke(app, ["batch", str(records), "--output", str(out)])
        assert result.exit_code == 0
        saved = json.loads(out.read_text(encoding="utf-8"))
        assert [(r["recordId"], r["category"]) for r in saved] == [("a", "Blood Test"), ("b", "Other")]

    def test_rejects_non_array(self, tmp_path):
        records = tmp_path / "records.json"
        records.write_text(json.dumps({"_id": "a"}), encoding="utf-8")
        result = runner.invoke(app, ["batch", str(records)])
        assert result.exit_code != 0


class TestCategoriesCommand:
    def test_lists_categories(self):
        result = runner.invoke(app, ["categories"])
        assert result.exit_code == 0
        assert "Blood Test" in result.stdout


class TestInsightsCommand:
    def test_json_report(self, tmp_path, dataset):
        path = tmp_path / "dataset.json"
        path.write_text(json.dumps(dataset.to_json_dict()), encoding="utf-8")
        result = runner.invoke(app, ["insights", str(path), "--json"])
        assert result.exit_code == 0
        report = json.loads(result.stdout)
        assert report["recommendations"][-1]["title"] == "Expand Service Offerings"
