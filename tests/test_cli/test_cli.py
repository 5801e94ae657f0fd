"""Tests for the tablestyle CLI commands."""
from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from tablestyle.cli.main import cli


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_doc(tmp_path: Path, attributes: dict, rows=None, header=None) -> str:
    doc = {"rows": rows if rows is not None else [["x"], ["y"], ["x"]], "attributes": attributes}
    if header is not None:
        doc["header"] = header
    path = tmp_path / "table.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "conditional styling" in result.output
        assert "check" in result.output
        assert "restyle" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_valid_rules(self, tmp_path: Path) -> None:
        path = _write_doc(
            tmp_path,
            {
                "background": '(("^x$" "red" nil nil))',
                "custom": "((t (:weight bold) nil 2))",
                "striped": True,
            },
        )
        result = CliRunner().invoke(cli, ["check", path])
        assert result.exit_code == 0
        assert "OK: table.json" in result.output
        assert "background: 1 rule(s)" in result.output
        assert "computed:   1 snippet(s)" in result.output

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"foreground": '(("x" "red")'})
        result = CliRunner().invoke(cli, ["check", path])
        assert result.exit_code == 1
        assert "Syntax error in foreground" in result.output

    def test_deeply_nested_rules(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"background": "(" * 3000 + ")" * 3000})
        result = CliRunner().invoke(cli, ["check", path])
        assert result.exit_code == 1
        assert "ERROR [background]" in result.output
        assert "nested deeper" in result.output

    def test_unknown_attribute_warning(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"backgrund": '((t "red"))', "foreground": '((t "blue"))'})
        result = CliRunner().invoke(cli, ["check", path])
        assert result.exit_code == 0
        assert "WARNING: unknown attribute 'backgrund' is ignored" in result.output
        assert "foreground: 1 rule(s)" in result.output

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = CliRunner().invoke(cli, ["check", str(path)])
        assert result.exit_code == 1
        assert "Document error" in result.output

    def test_missing_file(self) -> None:
        result = CliRunner().invoke(cli, ["check", "does-not-exist.json"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# restyle command
# ---------------------------------------------------------------------------


class TestRestyleCommand:
    def test_prints_markers(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"background": '(("^x$" "red"))'})
        result = CliRunner().invoke(cli, ["restyle", path])
        assert result.exit_code == 0
        assert "| x |" in result.output
        assert result.output.count(":background red") == 2

    def test_json_output(self, tmp_path: Path) -> None:
        path = _write_doc(
            tmp_path,
            {"foreground": '((t "blue"))', "computed": "(:slant italic)"},
            rows=[["a", ""]],
        )
        result = CliRunner().invoke(cli, ["restyle", "--json", path])
        assert result.exit_code == 0
        markers = json.loads(result.output)
        assert markers[0]["text"] == "a"
        assert markers[0]["attributes"] == {"slant": "italic", "foreground": "blue"}
        assert markers[1]["attributes"] == {"slant": "italic"}

    def test_stripe_color_option(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"striped": True})
        result = CliRunner().invoke(cli, ["restyle", "--json", "--stripe-color", "#ddd", path])
        assert result.exit_code == 0
        markers = json.loads(result.output)
        assert [m["attributes"] for m in markers] == [{"background": "#ddd"}]

    def test_syntax_error_exit_code(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"custom": "((t (:weight)))"})
        result = CliRunner().invoke(cli, ["restyle", path])
        assert result.exit_code == 1
        assert "Syntax error in custom" in result.output

    def test_snippet_failure_reported(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"computed": "(+ text 1)"}, rows=[["x"]])
        result = CliRunner().invoke(cli, ["restyle", path])
        assert result.exit_code == 0
        assert "WARNING [cell=1,1]" in result.output

    def test_deeply_nested_snippet_exit_code(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"computed": "(" * 3000 + ")" * 3000})
        result = CliRunner().invoke(cli, ["restyle", path])
        assert result.exit_code == 1
        assert "Syntax error in computed" in result.output

    def test_strict_snippet_failure(self, tmp_path: Path) -> None:
        path = _write_doc(tmp_path, {"computed": "(+ text 1)"}, rows=[["x"]])
        result = CliRunner().invoke(cli, ["restyle", "--strict", path])
        assert result.exit_code == 1
        assert "Snippet failed" in result.output
