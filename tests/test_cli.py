"""Tests for the termcfg command line."""

import pytest
import yaml
from typer.testing import CliRunner

from termcfg import __version__
from termcfg.main import typer_app

runner = CliRunner()


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """Point config discovery at an empty directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("TERMCFG_DEBUG", raising=False)


def test_version():
    result = runner.invoke(typer_app, ["--version"])
    assert result.exit_code == 0
    assert f"termcfg {__version__}" in result.output


# =============================================================================
# parse
# =============================================================================


class TestParseCommand:
    def test_yaml_output(self, tmp_path):
        cfg = tmp_path / "config"
        cfg.write_text("rows = 24\nno-flash\n")
        result = runner.invoke(typer_app, ["parse", str(cfg), "--yaml"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.output) == [
            {"key": "rows", "value": "24", "line": 1},
            {"key": "no-flash", "value": None, "line": 2},
        ]

    def test_table_output(self, tmp_path):
        cfg = tmp_path / "config"
        cfg.write_text("rows = 24\n")
        result = runner.invoke(typer_app, ["parse", str(cfg)])
        assert result.exit_code == 0
        assert "rows" in result.output
        assert "'24'" in result.output

    def test_syntax_error_exits_nonzero(self, tmp_path):
        cfg = tmp_path / "config"
        cfg.write_text('title = x "y"\n')
        result = runner.invoke(typer_app, ["parse", str(cfg)])
        assert result.exit_code == 1
        assert "unexpected" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(typer_app, ["parse", str(tmp_path / "missing")])
        assert result.exit_code == 2
        assert "Config file not found" in result.output


# =============================================================================
# expand and render
# =============================================================================


class TestExpandCommand:
    def test_list(self):
        result = runner.invoke(typer_app, ["expand", '["a b", c\\,d]'])
        assert result.exit_code == 0
        assert result.output.splitlines()[:2] == ["a b", "c,d"]

    def test_scalar(self):
        result = runner.invoke(typer_app, ["expand", "a,b,c"])
        assert result.output.splitlines() == ["a,b,c"]

    def test_warning_for_single_element_list(self):
        result = runner.invoke(typer_app, ["expand", "[a]"])
        assert result.exit_code == 0
        assert "single element list" in result.output


class TestRenderCommand:
    def test_render_with_variables(self):
        result = runner.invoke(typer_app, ["render", "{?n>3:big}", "-V", "n:i32=5"])
        assert result.exit_code == 0
        assert result.output.strip() == "big"

    def test_multiple_variables(self):
        result = runner.invoke(
            typer_app,
            ["render", "{title} ({cols})", "--var", "title=vim", "--var", "cols:u32=80"],
        )
        assert result.output.strip() == "vim (80)"

    def test_template_error_exits_nonzero(self):
        result = runner.invoke(typer_app, ["render", "x{missing}"])
        assert result.exit_code == 1
        assert "undefined variable" in result.output

    def test_bad_binding(self):
        result = runner.invoke(typer_app, ["render", "{n}", "-V", "n:i32=abc"])
        assert result.exit_code == 1
        assert "bad variable" in result.output


# =============================================================================
# settings
# =============================================================================


@pytest.mark.usefixtures("no_user_config")
class TestSettingsCommand:
    def test_defaults(self):
        result = runner.invoke(typer_app, ["settings"])
        assert result.exit_code == 0
        assert "(defaults)" in result.output
        assert "Window title: 'Wayst'" in result.output

    def test_config_and_program_title(self, tmp_path):
        cfg = tmp_path / "term.conf"
        cfg.write_text("title = Shell\nrows = 40\n")
        result = runner.invoke(typer_app, ["settings", "-c", str(cfg), "--title", "vim"])
        assert result.exit_code == 0
        assert "Window title: 'vim - Shell'" in result.output
        assert "80x40" in result.output

    def test_missing_config(self, tmp_path):
        result = runner.invoke(typer_app, ["settings", "-c", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_strict_mode(self, tmp_path):
        cfg = tmp_path / "term.conf"
        cfg.write_text("bogus = 1\n")
        result = runner.invoke(typer_app, ["settings", "-c", str(cfg), "--strict"])
        assert result.exit_code == 1
        assert "problem(s) in config" in result.output

    def test_lenient_mode_reports_problem_count(self, tmp_path):
        cfg = tmp_path / "term.conf"
        cfg.write_text("bogus = 1\n")
        result = runner.invoke(typer_app, ["settings", "-c", str(cfg)])
        assert result.exit_code == 0
        assert "1 problem(s) in config" in result.output
