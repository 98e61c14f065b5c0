"""Tests for CLI (__main__.py)."""

from __future__ import annotations

import json
from pathlib import Path
from textwrap import dedent

import pytest

from form_binder.__main__ import main


# ── Helpers ─────────────────────────────────────────────────────────


def _make_form_yaml(tmp_path: Path, issues_json_file: Path) -> Path:
    """Create a self-contained tags + issue form in *tmp_path*.

    Returns the path to the form YAML file.
    """
    form_yaml = dedent(f"""\
        version: "1.0"
        form:
          name: "task"
          lookups:
            issues:
              source: "json_file"
              inline_config:
                file_path: "{issues_json_file}"
          fields:
            - name: "tags"
              model_transformers:
                - name: "string_list"
            - name: "issue"
              model_transformers:
                - name: "entity_to_identifier"
                  inline_config:
                    lookup: "issues"
        settings:
          log_level: "WARNING"
    """)
    config_path = tmp_path / "form.yaml"
    config_path.write_text(form_yaml)
    return config_path


def _write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload))
    return path


# =====================================================================
# CLI argument parsing
# =====================================================================


class TestCLIArgParsing:
    """Verify argparse wiring and validation."""

    def test_list_modules_flag(self, capsys):
        """--list-modules prints modules and exits without needing --config."""
        main(["--list-modules"])
        captured = capsys.readouterr()
        assert "TRANSFORMERS" in captured.out
        assert "LOOKUPS" in captured.out
        assert "entity_to_identifier" in captured.out
        assert "sql_database" in captured.out

    def test_list_modules_ignores_config(self, capsys):
        main(["-l", "--config", "nonexistent.yaml"])
        assert "TRANSFORMERS" in capsys.readouterr().out

    def test_missing_config_errors(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--render"])
        assert exc_info.value.code != 0

    def test_missing_mode_errors(self, tmp_path, issues_json_file):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config_path)])
        assert exc_info.value.code != 0

    def test_render_and_submit_exclusive(self, tmp_path, issues_json_file):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        with pytest.raises(SystemExit):
            main(["-c", str(config_path), "--render", "--submit", "x.json"])


# =====================================================================
# Render / submit
# =====================================================================


class TestRender:
    def test_render_prints_view_values(self, tmp_path, issues_json_file, capsys):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        data = _write_json(
            tmp_path / "data.json", {"tags": ["a", "b", "c"], "issue": {"id": 55}}
        )
        main(["-c", str(config_path), "-d", str(data), "--render"])
        assert json.loads(capsys.readouterr().out) == {"tags": "a, b, c", "issue": "55"}

    def test_render_without_data(self, tmp_path, issues_json_file, capsys):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        main(["-c", str(config_path), "-r"])
        assert json.loads(capsys.readouterr().out) == {"tags": "", "issue": ""}


class TestSubmit:
    def test_valid_submission_writes_output(self, tmp_path, issues_json_file, capsys):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        submitted = _write_json(tmp_path / "view.json", {"tags": "x, y", "issue": "56"})
        out = tmp_path / "output" / "task.json"

        main(["-c", str(config_path), "-s", str(submitted), "-o", str(out)])

        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert report["errors"] == {}
        written = json.loads(out.read_text())
        assert written["tags"] == ["x", "y"]
        assert written["issue"]["title"] == "Flaky test"

    def test_invalid_submission_exits_1(self, tmp_path, issues_json_file, capsys):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        data = _write_json(tmp_path / "data.json", {"tags": ["old"], "issue": {"id": 55}})
        submitted = _write_json(tmp_path / "view.json", {"tags": "new", "issue": "404"})

        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config_path), "-d", str(data), "-s", str(submitted)])

        assert exc_info.value.code == 1
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is False
        assert set(report["errors"]) == {"issue"}
        assert "404" in report["errors"]["issue"]
        assert report["data"] == {"tags": ["new"], "issue": {"id": 55}}

    def test_keep_missing(self, tmp_path, issues_json_file, capsys):
        config_path = _make_form_yaml(tmp_path, issues_json_file)
        data = _write_json(tmp_path / "data.json", {"tags": ["old"]})
        submitted = _write_json(tmp_path / "view.json", {})

        main(["-c", str(config_path), "-d", str(data), "-s", str(submitted), "--keep-missing"])

        assert json.loads(capsys.readouterr().out)["data"] == {"tags": ["old"]}
