"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from pegtrace.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command away from any real pegtrace.toml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_render_character_ranges(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    out = tmp_path / "output.html"
    result = cli_runner.invoke(app, ["render", str(ranges_trace), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert "generated" in result.stdout
    assert out.read_text(encoding="utf-8").count("<details>") == 11


def test_render_token_indices(cli_runner: CliRunner, indices_trace: Path, tmp_path: Path):
    out = tmp_path / "output.html"
    result = cli_runner.invoke(app, ["render", str(indices_trace), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_from_stdin(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    out = tmp_path / "stdin.html"
    result = cli_runner.invoke(app, ["render", "-o", str(out)], input=ranges_trace.read_text())
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_default_output_path(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    result = cli_runner.invoke(app, ["render", str(ranges_trace)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "trace.html").exists()


def test_render_filters(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    out = tmp_path / "filtered.html"
    result = cli_runner.invoke(
        app, ["render", str(ranges_trace), "-o", str(out), "-h", "number", "-f", "expr"]
    )
    assert result.exit_code == 0, result.output
    html = out.read_text(encoding="utf-8")
    assert ">number</span>" not in html
    assert ">sum</span>" in html


def test_render_uses_config_file(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    config = tmp_path / "custom.toml"
    config.write_text('[render]\noutput = "from-config.html"\nhide = ["eof"]\n', encoding="utf-8")
    result = cli_runner.invoke(app, ["render", str(ranges_trace), "--config", str(config)])
    assert result.exit_code == 0, result.output
    html = (tmp_path / "from-config.html").read_text(encoding="utf-8")
    assert ">eof</span>" not in html


def test_invalid_config(cli_runner: CliRunner, ranges_trace: Path, tmp_path: Path):
    (tmp_path / "pegtrace.toml").write_text("[render]\nhide = 'eof'\n", encoding="utf-8")
    result = cli_runner.invoke(app, ["render", str(ranges_trace)])
    assert result.exit_code == 1
    assert "Config error" in result.output


def test_empty_trace_is_not_an_error(cli_runner: CliRunner, tmp_path: Path):
    trace = tmp_path / "empty.log"
    trace.write_text("nothing traced here\n", encoding="utf-8")
    out = tmp_path / "never.html"
    result = cli_runner.invoke(app, ["render", str(trace), "-o", str(out)])
    assert result.exit_code == 0
    assert "no trace" in result.stdout
    assert not out.exists()


def test_syntax_error_exits_nonzero(cli_runner: CliRunner, tmp_path: Path):
    trace = tmp_path / "bad.log"
    trace.write_text(
        "[PEG_INPUT_START]\nabc\n[PEG_TRACE_START]\n[PEG_TRACE] Gibberish\n[PEG_TRACE_STOP]\n",
        encoding="utf-8",
    )
    out = tmp_path / "never.html"
    result = cli_runner.invoke(app, ["render", str(trace), "-o", str(out)])
    assert result.exit_code == 1
    assert "Trace syntax error" in result.output
    assert not out.exists()


def test_structure_error_exits_nonzero(cli_runner: CliRunner, tmp_path: Path):
    trace = tmp_path / "bad.log"
    trace.write_text(
        "[PEG_INPUT_START]\nabc\n[PEG_TRACE_START]\n"
        "[PEG_TRACE] Attempting to match rule a at 1:1\n"
        "[PEG_TRACE] Matched rule b at 1:1 to 1:2\n"
        "[PEG_TRACE_STOP]\n",
        encoding="utf-8",
    )
    result = cli_runner.invoke(app, ["render", str(trace), "-o", str(tmp_path / "x.html")])
    assert result.exit_code == 1
    assert "Trace error" in result.output


def test_inspect(cli_runner: CliRunner, ranges_trace: Path):
    result = cli_runner.invoke(app, ["inspect", str(ranges_trace)])
    assert result.exit_code == 0, result.output
    assert "Trace #1" in result.stdout
    assert "backfilled" in result.stdout
    assert "times" in result.stdout


def test_inspect_max_depth(cli_runner: CliRunner, ranges_trace: Path):
    result = cli_runner.invoke(app, ["inspect", str(ranges_trace), "--max-depth", "1"])
    assert result.exit_code == 0, result.output
    assert "expr" in result.stdout
    assert "product" not in result.stdout


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "pegtrace version" in result.stdout
