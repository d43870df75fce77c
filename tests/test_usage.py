"""Tests for usage lines, rich help payloads and tree helpers."""

import json

import pytest

from sworncmd.chat import ClickAction, HoverAction, components_to_json, format_message, strip_markup
from sworncmd.commands import Command
from sworncmd.commands.tree import find_command, iter_tree, visible_commands
from sworncmd.commands.usage import (
    click_text,
    fancy_usage,
    fancy_usage_lines,
    format_missing,
    hover_text,
    usage_line,
    usage_lines,
)
from sworncmd.models import RegistrationError, Visibility
from sworncmd.permissions import NodePermissionPolicy


@pytest.fixture
def kick():
    kick = Command("kick", description="Kick a player\nRemoves them from the server")
    kick.required("player", "The player to kick").optional("reason")
    return kick


@pytest.fixture
def perm():
    perm = Command("perm", description="Manage permissions")
    perm.required("group")
    add = Command("add", description="Add a permission")
    add.required("group").required("permission")
    perm.add_child(add)
    return perm


class TestUsageLine:
    """Tests for plain usage lines."""

    def test_basic(self, kick):
        assert usage_line(kick) == "&b/kick &3<player> &3[reason]"

    def test_description(self, kick):
        assert usage_line(kick, description=True) == "&b/kick &3<player> &3[reason] &eKick a player"

    def test_prefix(self, kick):
        assert usage_line(kick, prefix="sw") == "&b/sw kick &3<player> &3[reason]"
        kick.prefix = "sw"
        assert usage_line(kick) == "&b/sw kick &3<player> &3[reason]"
        assert usage_line(kick, prefix="") == "&b/kick &3<player> &3[reason]"

    def test_sub_command(self, perm):
        assert usage_line(perm.children[0]) == "&b/perm add &3<group> &3<permission>"

    def test_interleaved_order_is_kept(self):
        cmd = Command("x").optional("a").required("b")
        assert usage_line(cmd) == "&b/x &3[a] &3<b>"

    def test_no_arguments(self):
        assert usage_line(Command("spawn")) == "&b/spawn"

    def test_usage_lines(self, kick):
        kick.alternative().required("uuid")
        assert usage_lines(kick) == [
            "&b/kick &3<player> &3[reason] &eKick a player",
            "&b/kick &3<uuid>",
        ]

    def test_click_text(self, kick):
        assert click_text(kick) == "/kick <player> [reason]"

    def test_format_missing(self, kick):
        assert format_missing(kick.syntaxes[0].arguments) == "<player> (The player to kick), [reason]"


class TestFancyUsage:
    """Tests for hover and click enabled usage lines."""

    def test_components(self, kick):
        (component,) = fancy_usage(kick)
        assert component.text == format_message("&b/kick &3<player> &3[reason]")
        assert component.click.action == ClickAction.SUGGEST_COMMAND
        assert component.click.value == "/kick <player> [reason]"
        assert component.hover.action == HoverAction.SHOW_TEXT

    def test_hover_content(self, kick):
        hover = strip_markup(fancy_usage(kick)[0].hover.value)
        assert hover.splitlines() == [
            "/kick <player> [reason]:",
            "<player>: The player to kick",
            "Kick a player",
            "Removes them from the server",
        ]
        assert "Permission" not in hover

    def test_hover_permission(self):
        cmd = Command("fly", permission="fly")
        hover = strip_markup(hover_text(cmd, cmd.syntaxes[0], NodePermissionPolicy("sworn")))
        assert hover.splitlines()[-3:] == ["", "Permission:", "sworn.fly"]

    def test_list_item(self, kick):
        (component,) = fancy_usage(kick, list_item=True)
        assert component.text.startswith(format_message("&b- &b/kick"))

    def test_one_line_per_syntax(self, kick):
        kick.alternative().required("uuid")
        lines = fancy_usage_lines(kick)
        assert len(lines) == 2
        assert lines[1][0].click.value == "/kick <uuid>"

    def test_json(self, kick):
        data = json.loads(components_to_json(fancy_usage(kick)))
        assert data[0]["clickEvent"] == {"action": "suggest_command", "value": "/kick <player> [reason]"}
        assert data[0]["hoverEvent"]["action"] == "show_text"

    def test_renders_unexecuted_commands_for_any_prefix(self, perm):
        (component,) = fancy_usage(perm.children[0], prefix="sw")
        assert component.click.value == "/sw perm add <group> <permission>"


class TestTree:
    """Tests for tree structure and lookups."""

    def test_add_child_links_parent(self, perm):
        add = perm.children[0]
        assert add.parent is perm
        assert add.root is perm
        assert add.path == ["perm", "add"]
        assert not add.is_root

    def test_sibling_clash(self, perm):
        with pytest.raises(RegistrationError):
            perm.add_child(Command("ADD"))
        with pytest.raises(RegistrationError):
            perm.add_child(Command("plus", aliases=["add"]))

    def test_single_parent(self, perm):
        with pytest.raises(RegistrationError):
            Command("other").add_child(perm.children[0])

    def test_no_cycles(self, perm):
        add = perm.children[0]
        with pytest.raises(RegistrationError):
            add.add_child(perm)
        with pytest.raises(RegistrationError):
            perm.add_child(perm)

    def test_invalid_names(self):
        for name in ("", "two words", "  "):
            with pytest.raises(RegistrationError):
                Command(name)

    def test_subcommand_decorator(self, perm):
        @perm.subcommand(aliases=["rm"])
        def remove(ctx):
            "<group> <permission> Remove a permission"

        assert remove.parent is perm
        assert perm.find_child("RM") is remove

    def test_find_command(self, perm):
        assert find_command([perm], ["PERM", "add"]) is perm.children[0]
        assert find_command([perm], ["perm"]) is perm
        assert find_command([perm], ["perm", "nope"]) is None
        assert find_command([perm], []) is None
        assert find_command([perm], ["/perm", "add"]) is perm.children[0]
        assert find_command([perm], ["perm", "/add"]) is None

    def test_iter_tree(self, perm):
        assert [c.name for c in iter_tree(perm)] == ["perm", "add"]

    def test_visible_commands_checks_each_node(self, player):
        root = Command("admin", visibility=Visibility.NONE)
        root.add_child(Command("info"))
        root.add_child(Command("reload", visibility=Visibility.OPS))
        names = [c.name for c in visible_commands([root], player, NodePermissionPolicy())]
        assert names == ["info"]
