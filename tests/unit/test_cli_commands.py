"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from buildeta.cli.app import app
from buildeta.models.progress import Progress

runner = CliRunner()


def _write_replay(path: Path, snapshots: list[Progress]) -> Path:
    path.write_text(
        "\n".join(s.model_dump_json() for s in snapshots) + "\n", encoding="utf-8"
    )
    return path


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    """The CLI must register all expected commands and show help."""

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "replay" in result.output
        assert "simulate" in result.output
        assert "title" in result.output

    def test_subcommand_help(self):
        for command in ("replay", "simulate", "title"):
            result = runner.invoke(app, [command, "--help"])
            assert result.exit_code == 0, command


# ---------------------------------------------------------------------------
# Test: replay
# ---------------------------------------------------------------------------


class TestReplayCommand:
    def test_prints_every_line(self, tmp_path, linear_build):
        path = _write_replay(tmp_path / "build.jsonl", linear_build)
        result = runner.invoke(app, ["replay", str(path), "--sample", "1"])
        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0] == "Starting..."
        assert lines[1] == "0s (0%)"
        assert lines[-2] == "0s (100%)"
        assert lines[-1] == "Finished"

    def test_table_mode(self, tmp_path, linear_build):
        path = _write_replay(tmp_path / "build.jsonl", linear_build)
        result = runner.invoke(app, ["replay", str(path), "-s", "1", "--table"])
        assert result.exit_code == 0, result.output
        assert "100%" in result.output

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "build.jsonl"
        path.write_text("\n" + Progress().model_dump_json() + "\n\n", encoding="utf-8")
        result = runner.invoke(app, ["replay", str(path), "-s", "1"])
        assert result.exit_code == 0
        assert result.output.strip().splitlines() == ["Starting...", "0s (0%)", "Finished"]

    def test_invalid_line(self, tmp_path):
        path = tmp_path / "bad.jsonl"
        path.write_text('{"count_todo": -4}\n', encoding="utf-8")
        result = runner.invoke(app, ["replay", str(path), "-s", "1"])
        assert result.exit_code == 1
        assert "line 1" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["replay", str(tmp_path / "nope.jsonl")])
        assert result.exit_code != 0

    def test_non_positive_sample(self, tmp_path, linear_build):
        path = _write_replay(tmp_path / "build.jsonl", linear_build)
        result = runner.invoke(app, ["replay", str(path), "-s", "0"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# Test: title and simulate
# ---------------------------------------------------------------------------


class TestTitleCommand:
    def test_xterm_title(self):
        result = runner.invoke(app, ["title", "hello"], env={"TERM": "xterm"})
        assert result.exit_code == 0
        assert "\x1b]0;hello\x07" in result.output

    def test_dumb_terminal(self):
        result = runner.invoke(app, ["title", "hello"], env={"TERM": "dumb"})
        assert result.exit_code == 0
        assert "\x1b]0;" not in result.output


class TestSimulateCommand:
    def test_small_build_completes(self):
        result = runner.invoke(
            app,
            [
                "simulate",
                "--rules", "3",
                "--jobs", "2",
                "--sample", "0.01",
                "--speed", "200",
                "--link-every", "0",
            ],
            env={"TERM": "dumb"},
        )
        assert result.exit_code == 0, result.output
        assert "Starting..." in result.output
        assert "Finished" in result.output
        assert "complete" in result.output

    def test_rejects_bad_jobs(self):
        result = runner.invoke(app, ["simulate", "--jobs", "0"])
        assert result.exit_code == 2
