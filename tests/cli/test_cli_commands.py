"""Tests for the extract, validate, snapshot and projects commands."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from evo.cli.main import app
from evo.core.snapshot import EXPECTED_RESULTS_FILE

runner = CliRunner()

BROKEN_PROPOSAL = """\
# Broken

* Proposal: [SE-0402](0402-broken.md)
* Status: **Accepted**
* Review: [review](https://forums.swift.org/t/se-0402/1)
"""


class TestExtract:
    def test_snapshot_to_stdout(self, snapshot_dir):
        result = runner.invoke(app, ["extract", "--snapshot-path", str(snapshot_dir), "-o", "-"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [p["id"] for p in data["proposals"]] == ["SE-0400", "SE-0401"]
        assert data["implementationVersions"] == ["5.9"]

    def test_snapshot_to_directory(self, snapshot_dir, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        result = runner.invoke(app, ["extract", "--snapshot-path", str(snapshot_dir), "-o", str(out)])
        assert result.exit_code == 0, result.output
        data = json.loads((out / "evolution.json").read_text())
        assert len(data["proposals"]) == 2

    def test_project_output_filename(self, snapshot_dir, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        result = runner.invoke(
            app, ["extract", "--snapshot-path", str(snapshot_dir), "-o", str(out), "--project", "testing"],
        )
        assert result.exit_code == 0, result.output
        assert (out / "testing-evolution.json").exists()

    def test_invalid_force_extract(self, snapshot_dir):
        result = runner.invoke(
            app, ["extract", "--snapshot-path", str(snapshot_dir), "--force-extract", "bogus", "-o", "-"],
        )
        assert result.exit_code == 1
        assert "Invalid --force-extract value" in result.output

    def test_missing_snapshot(self, tmp_path):
        result = runner.invoke(app, ["extract", "--snapshot-path", str(tmp_path / "nope.evosnapshot")])
        assert result.exit_code == 1

    def test_unknown_project(self, snapshot_dir):
        result = runner.invoke(app, ["extract", "--snapshot-path", str(snapshot_dir), "-p", "rust"])
        assert result.exit_code == 1
        assert "Unknown project" in result.output


class TestValidate:
    def test_clean_files(self, proposals_dir):
        result = runner.invoke(app, ["validate", str(proposals_dir)])
        assert result.exit_code == 0, result.output
        assert "Swift Evolution Validation Report" in result.stdout
        assert "NO ISSUES FOUND" in result.stdout

    def test_errors_exit_nonzero(self, tmp_path):
        path = tmp_path / "0402-broken.md"
        path.write_text(BROKEN_PROPOSAL)
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "SE-0402 'Broken'" in result.stdout
        assert "[7] Missing author(s)." in result.stdout

    def test_json_format(self, tmp_path):
        path = tmp_path / "0402-broken.md"
        path.write_text(BROKEN_PROPOSAL)
        result = runner.invoke(app, ["validate", str(path), "--format", "json"])
        assert result.exit_code == 1
        flagged = json.loads(result.stdout)
        assert flagged[0]["id"] == "SE-0402"
        assert flagged[0]["errors"][0]["code"] == 7

    def test_report_to_file(self, proposals_dir, tmp_path):
        report = tmp_path / "report.txt"
        result = runner.invoke(app, ["validate", str(proposals_dir), "-o", str(report)])
        assert result.exit_code == 0, result.output
        assert report.read_text().endswith("NO ISSUES FOUND\n")

    def test_snapshot(self, snapshot_dir):
        result = runner.invoke(app, ["validate", "--snapshot-path", str(snapshot_dir)])
        assert result.exit_code == 0, result.output

    def test_one_source_only(self, proposals_dir, snapshot_dir):
        result = runner.invoke(app, ["validate", str(proposals_dir), "--snapshot-path", str(snapshot_dir)])
        assert result.exit_code == 1
        assert "not more than one" in result.output

    def test_non_markdown_file(self, proposals_dir):
        result = runner.invoke(app, ["validate", str(proposals_dir / "notes.txt")])
        assert result.exit_code == 1


class TestSnapshot:
    def test_from_files(self, proposals_dir, tmp_path):
        destination = tmp_path / "captured"
        result = runner.invoke(app, ["snapshot", str(proposals_dir), "-o", str(destination)])
        assert result.exit_code == 0, result.output
        snapshot = tmp_path / "captured.evosnapshot"
        assert sorted(p.name for p in (snapshot / "proposals").iterdir()) == [
            "0400-feature-title.md", "0401-other.md",
        ]
        expected = json.loads((snapshot / EXPECTED_RESULTS_FILE).read_text())
        assert len(expected["proposals"]) == 2

    def test_existing_destination(self, proposals_dir, tmp_path):
        (tmp_path / "captured.evosnapshot").mkdir()
        result = runner.invoke(app, ["snapshot", str(proposals_dir), "-o", str(tmp_path / "captured")])
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestProjects:
    def test_json(self):
        result = runner.invoke(app, ["projects", "--format", "json"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert [r["key"] for r in rows] == ["swift", "testing", "foundation"]
        assert rows[0]["prefix"] == "SE"

    def test_text(self):
        result = runner.invoke(app, ["projects", "--format", "text"])
        assert result.exit_code == 0
        assert "SE" in result.stdout
