"""Tests for the text-grid CLI."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from text_grid.cli import cli

FLAT = [{"a": 300, "b": 1}, {"a": 2, "b": 200}]

FLAT_TABLE = "  a  |  b  |\n-----|-----|\n 300 |   1 |\n   2 | 200 |\n"


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


class TestRender:
    """Tests for `text-grid render`."""

    def test_json_stdin(self, runner: CliRunner) -> None:
        """A JSON array on stdin renders as a table."""
        result = runner.invoke(cli, ["render"], input=json.dumps(FLAT))
        assert result.exit_code == 0
        assert result.output == FLAT_TABLE

    def test_json_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Records are read from a file argument."""
        path = tmp_path / "rows.json"
        path.write_text(json.dumps(FLAT))
        result = runner.invoke(cli, ["render", str(path)])
        assert result.exit_code == 0
        assert result.output == FLAT_TABLE

    def test_jsonl(self, runner: CliRunner) -> None:
        """JSON Lines input has one record per line; blank lines are skipped."""
        text = "\n".join(json.dumps(row) for row in FLAT) + "\n\n"
        result = runner.invoke(cli, ["render", "--input", "jsonl"], input=text)
        assert result.exit_code == 0
        assert result.output == FLAT_TABLE

    def test_yaml(self, runner: CliRunner) -> None:
        """YAML lists of mappings are accepted."""
        result = runner.invoke(cli, ["render", "-i", "yaml"], input=yaml.safe_dump(FLAT))
        assert result.exit_code == 0
        assert result.output == FLAT_TABLE

    def test_yaml_non_string_keys(self, runner: CliRunner) -> None:
        """YAML keys that load as booleans or floats become header text."""
        result = runner.invoke(cli, ["render", "-i", "yaml"], input="- yes: 1\n- 1.5: a\n")
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == " True | 1.5 |"

    def test_single_mapping(self, runner: CliRunner) -> None:
        """A single mapping is one row."""
        result = runner.invoke(cli, ["render"], input='{"k": "v"}')
        assert result.exit_code == 0
        assert result.output == " k |\n---|\n v |\n"

    def test_nested_records(self, runner: CliRunner) -> None:
        """Nested mappings become groups and lists become numbered columns."""
        rows = [{"name": "x", "tags": ["a", "b"]}, {"name": "y", "size": {"w": 1, "h": 2}}]
        result = runner.invoke(cli, ["render"], input=json.dumps(rows))
        assert result.exit_code == 0
        header = result.output.splitlines()[0]
        assert "tags" in header
        assert "size" in header
        widths = {len(line) for line in result.output.splitlines()}
        assert len(widths) == 1

    def test_csv_output(self, runner: CliRunner) -> None:
        """--format csv writes CSV."""
        result = runner.invoke(cli, ["render", "--format", "csv"], input=json.dumps(FLAT))
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a,b", "300,1", "2,200"]

    def test_empty_input(self, runner: CliRunner) -> None:
        """Empty input prints nothing."""
        result = runner.invoke(cli, ["render"], input="")
        assert result.exit_code == 0
        assert result.output == ""

    def test_shape_conflict(self, runner: CliRunner) -> None:
        """A shape conflict exits with status 1 and an error message."""
        rows = [{"a": 1}, {"a": {"b": 2}}]
        result = runner.invoke(cli, ["render"], input=json.dumps(rows))
        assert result.exit_code == 1
        assert "Error: Column shape conflict at 'a'" in result.output

    def test_invalid_json(self, runner: CliRunner) -> None:
        """Malformed input exits with status 1."""
        result = runner.invoke(cli, ["render"], input="[{")
        assert result.exit_code == 1
        assert "Invalid json input" in result.output

    def test_invalid_yaml(self, runner: CliRunner) -> None:
        """Malformed YAML exits with status 1."""
        result = runner.invoke(cli, ["render", "-i", "yaml"], input="a: [1, 2\n")
        assert result.exit_code == 1
        assert "Invalid yaml input" in result.output

    def test_not_a_list(self, runner: CliRunner) -> None:
        """Scalar documents are rejected."""
        result = runner.invoke(cli, ["render"], input='"hello"')
        assert result.exit_code == 1
        assert "must contain a list of records" in result.output

    def test_ambiguous_width(self, runner: CliRunner) -> None:
        """--ambiguous-width counts ambiguous characters as wide."""
        rows = [{"g": "αβ"}]
        result = runner.invoke(cli, ["render", "--ambiguous-width", "2"], input=json.dumps(rows))
        assert result.exit_code == 0
        assert result.output.splitlines()[1] == "------|"

    def test_ambiguous_width_env(self, runner: CliRunner) -> None:
        """The ambiguous width is read from the environment."""
        rows = [{"g": "αβ"}]
        result = runner.invoke(
            cli,
            ["render"],
            input=json.dumps(rows),
            env={"TEXT_GRID_AMBIGUOUS_WIDTH": "2"},
        )
        assert result.exit_code == 0
        assert result.output.splitlines()[1] == "------|"

    def test_ambiguous_width_out_of_range(self, runner: CliRunner) -> None:
        """Widths other than 1 or 2 are a usage error."""
        result = runner.invoke(cli, ["render", "--ambiguous-width", "3"], input="[]")
        assert result.exit_code == 2

    def test_log_level(self, runner: CliRunner) -> None:
        """--log-level is accepted before the command."""
        result = runner.invoke(cli, ["--log-level", "debug", "render"], input=json.dumps(FLAT))
        assert result.exit_code == 0
        assert FLAT_TABLE in result.output


class TestSchema:
    """Tests for `text-grid schema`."""

    def test_lists_columns(self, runner: CliRunner) -> None:
        """Discovered columns are listed as a tree."""
        rows = [{"a": 1, "b": {"x": 1}}, {"b": {"y": 2}, "c": 3}]
        result = runner.invoke(cli, ["schema"], input=json.dumps(rows))
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "a (column)",
            "b (group)",
            "  x (column)",
            "  y (column)",
            "c (column)",
        ]

    def test_conflict(self, runner: CliRunner) -> None:
        """Conflicts are reported the same way as for render."""
        rows = [{"a": [1]}, {"a": 2}]
        result = runner.invoke(cli, ["schema"], input=json.dumps(rows))
        assert result.exit_code == 1
        assert "Column shape conflict" in result.output


class TestHelp:
    """Tests for help output."""

    def test_group_help(self, runner: CliRunner) -> None:
        """The group lists its commands."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "render" in result.output
        assert "schema" in result.output
