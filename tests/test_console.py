"""Tests for the interactive console host."""

import io
import logging

import pytest

from sworncmd import CommandHandler, constants
from sworncmd.commands import Command
from sworncmd.config import Configuration
from sworncmd.console import build_handler, command_labels, main, prompt_lines, run_console
from sworncmd.models import ExitCode
from sworncmd.schema import SWORNCMD_CONFIG_SCHEMA


@pytest.fixture
def handler():
    return build_handler(CommandHandler())


def output(console):
    return console.stream.getvalue().splitlines()


class TestRunConsole:
    """Tests for run_console."""

    def test_runs_lines_until_exit(self, handler, console):
        run_console(handler, ["whoami", "", "sum 1 2", "EXIT", "echo never"], console)
        assert output(console) == ["You are Console (operator: yes)", "1 + 2 = 3"]

    def test_alias_and_decimals(self, handler, console):
        run_console(handler, ["add 2 2.5"], console)
        assert output(console) == ["2 + 2.5 = 4.5"]

    def test_invalid_number(self, handler, console):
        run_console(handler, ["sum 1 x"], console)
        assert output(console) == ["Error: x is not a number."]

    def test_echo_joins_words(self, handler, console):
        run_console(handler, ['echo hello "big world"'], console)
        assert output(console) == ["[Sworn] hello big world"]

    def test_missing_argument(self, handler, console):
        run_console(handler, ["echo"], console)
        (line,) = output(console)
        assert line.startswith("Error: Invalid arguments! Missing: <message>")
        assert line.endswith("Try: /echo <message>")

    def test_unknown(self, handler, console):
        run_console(handler, ["/fly"], console)
        assert output(console) == ['Error: Unknown command "fly". Try "/help" for a list of commands.']


class TestCommandLabels:
    """Tests for the prompt completions."""

    def test_labels(self, handler, console):
        assert command_labels(handler, console) == ["help", "echo", "sum", "whoami"]

    def test_labels_with_prefix_and_children(self, console):
        config = Configuration({"prefix": "sw"}, logger=logging.getLogger("test"), schema=SWORNCMD_CONFIG_SCHEMA)
        perm = Command("perm")
        perm.add_child(Command("add"))
        handler = build_handler(CommandHandler(config), [perm])
        assert command_labels(handler, console) == ["sw help", "sw echo", "sw sum", "sw whoami", "sw perm", "sw perm add"]

    def test_prompt_lines(self, handler, console, mocker):
        autocomplete = mocker.patch("sworncmd.console.questionary.autocomplete")
        autocomplete.return_value.ask.side_effect = ["whoami", "sum 1 1", None]
        assert list(prompt_lines(handler, console)) == ["whoami", "sum 1 1"]
        autocomplete.assert_called_with("/", choices=["help", "echo", "sum", "whoami"], qmark="")


class TestMain:
    """Tests for the entry point."""

    @pytest.fixture(autouse=True)
    def environment(self, monkeypatch, tmp_path, mocker):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr(constants, "CONFIG_FILE", tmp_path / "absent.toml")
        return mocker.patch("sworncmd.console.init_logger")

    def test_reads_stdin(self, monkeypatch, capsys, environment):
        monkeypatch.setattr("sys.stdin", io.StringIO("echo hi\nwhoami\n"))
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == ExitCode.SUCCESS
        assert capsys.readouterr().out.splitlines() == ["[Sworn] hi", "You are Console (operator: yes)"]
        environment.assert_called_once_with(None, force_debug=False)

    def test_debug_flag_and_config(self, monkeypatch, capsys, tmp_path, environment):
        config = tmp_path / "config.toml"
        config.write_text('[sworncmd]\nprefix = "sw"\nlog_file = "/tmp/sworncmd.log"\n')
        monkeypatch.setattr("sys.stdin", io.StringIO("sw echo hi\n"))
        with pytest.raises(SystemExit):
            main(["--debug", "--config", str(config)])
        assert capsys.readouterr().out.splitlines() == ["[Sworn] hi"]
        environment.assert_called_once_with("/tmp/sworncmd.log", force_debug=True)

    def test_config_error(self, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "absent.toml")])
        assert exc.value.code == ExitCode.CONFIG_ERROR
        assert "Config file not found" in capsys.readouterr().err

    def test_interactive_prompt(self, mocker, capsys):
        stdin = mocker.patch("sys.stdin")
        stdin.isatty.return_value = True
        questionary = mocker.patch("sworncmd.console.questionary")
        questionary.autocomplete.return_value.ask.side_effect = ["whoami", None]
        with pytest.raises(SystemExit):
            main([])
        questionary.print.assert_called_once()
        assert capsys.readouterr().out.splitlines() == ["You are Console (operator: yes)"]
