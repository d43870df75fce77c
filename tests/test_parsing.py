"""Tests for docstring parsing and argument value helpers."""

from sworncmd.commands import FunctionCommand, command
from sworncmd.commands.parsing import (
    normalize_command_name,
    parse_docstring,
    parse_syntax,
    to_bool,
    to_float,
    to_int,
)


class TestParseDocstring:
    """Tests for parse_docstring."""

    def test_empty(self):
        args, short, full = parse_docstring("")
        assert args == []
        assert short == "No description available."
        assert full == ""

    def test_no_args(self):
        args, short, full = parse_docstring("Show who is running commands")
        assert args == []
        assert short == "Show who is running commands"
        assert full == ""

    def test_required_and_optional(self):
        args, short, _ = parse_docstring("<player> [reason] Kick a player")
        assert [(a.name, a.required) for a in args] == [("player", True), ("reason", False)]
        assert short == "Kick a player"

    def test_choices_in_name(self):
        args, short, _ = parse_docstring("<on|off> Toggle it")
        assert args[0].name == "on|off"
        assert short == "Toggle it"

    def test_args_stop_at_text(self):
        """Brackets after the description are not arguments."""
        args, short, _ = parse_docstring("<name> Say hi to <someone>")
        assert [a.name for a in args] == ["name"]
        assert short == "Say hi to <someone>"

    def test_only_args(self):
        args, short, _ = parse_docstring("<a> <b>")
        assert len(args) == 2
        assert short == ""

    def test_multiline_and_args_block(self):
        docstring = """<player> [reason] Kick a player

        The player is disconnected.
        Args:
            player: The player to kick
            reason: Shown to the player
        """
        args, short, full = parse_docstring(docstring)
        assert short == "Kick a player"
        assert args[0].explanation == "The player to kick"
        assert args[1].explanation == "Shown to the player"
        assert full == "The player is disconnected."

    def test_args_block_ends_at_blank_line(self):
        docstring = "<a> Do it\nArgs:\n    a: First\n\nMore text"
        args, _, full = parse_docstring(docstring)
        assert args[0].explanation == "First"
        assert full == "More text"


class TestParseSyntax:
    """Tests for parse_syntax."""

    def test_usage_string(self):
        syntax = parse_syntax("<group> [permission]")
        assert syntax.size() == 2
        assert syntax.required_size() == 1


class TestFunctionCommand:
    """Tests for commands declared from functions."""

    def test_docstring_drives_declaration(self):
        def kick(ctx):
            """<player> [reason] Kick a player

            Disconnects the player.
            Args:
                player: The player to kick
            """

        cmd = FunctionCommand(kick, permission="kick")
        assert cmd.name == "kick"
        assert cmd.description_lines() == ["Kick a player", "Disconnects the player."]
        syntax = cmd.syntaxes[0]
        assert [a.render() for a in syntax] == ["<player>", "[reason]"]
        assert syntax.get(0, True).explanation == "The player to kick"
        assert cmd.gate.permission == "kick"

    def test_name_from_function(self):
        def sum_(ctx):
            "<a> <b> Add"

        def set_home(ctx):
            "Set home"

        assert FunctionCommand(sum_).name == "sum"
        assert FunctionCommand(set_home).name == "set-home"
        assert FunctionCommand(set_home, "sethome").name == "sethome"

    def test_explicit_description_wins(self):
        @command(description="Custom")
        def ping(ctx):
            "Default"

        assert ping.description == "Custom"

    def test_perform_calls_function(self):
        seen = []

        @command("ping")
        def _ping(ctx):
            "Ping"
            seen.append(ctx)
            return "pong"

        assert _ping.perform("ctx") == "pong"
        assert seen == ["ctx"]


class TestValueHelpers:
    """Tests for label and value conversions."""

    def test_normalize_command_name(self):
        assert normalize_command_name("/Kick") == "kick"
        assert normalize_command_name("PERM") == "perm"

    def test_to_int(self):
        assert to_int("42") == 42
        assert to_int(" -3 ") == -3
        assert to_int("4.2") is None
        assert to_int("abc") is None

    def test_to_float(self):
        assert to_float("1.5") == 1.5
        assert to_float("1,5") == 1.5
        assert to_float("x") is None

    def test_to_bool(self):
        assert to_bool("yes")
        assert to_bool("ON")
        assert not to_bool("no")
        assert not to_bool("maybe")
