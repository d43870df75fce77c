"""Tests for the permission gate, policies and senders."""

from enum import Enum
from unittest.mock import Mock

import pytest

from sworncmd.models import PermissionDenied, SenderKind, Visibility
from sworncmd.permissions import GENERIC_DENIAL, Gate, NodePermissionPolicy
from sworncmd.senders import PlayerSender, Sender, display_name, permission_matches


class Perm(Enum):
    KICK = "cmd.Kick"


class TestNodePermissionPolicy:
    """Tests for NodePermissionPolicy."""

    def test_describe(self):
        assert NodePermissionPolicy().describe("Kick") == "kick"
        assert NodePermissionPolicy("sworn").describe("kick") == "sworn.kick"
        assert NodePermissionPolicy("Sworn").describe(Perm.KICK) == "sworn.cmd.kick"

    def test_resolve(self, player):
        policy = NodePermissionPolicy("sworn")
        assert policy.resolve(player, None)
        assert not policy.resolve(player, "kick")
        player.grant("sworn.kick")
        assert policy.resolve(player, "kick")

    def test_resolve_wildcard(self, player):
        policy = NodePermissionPolicy("sworn")
        player.grant("sworn.*")
        assert policy.resolve(player, Perm.KICK)


class TestGate:
    """Tests for the visibility table."""

    @pytest.fixture
    def policy(self):
        policy = Mock()
        policy.resolve.return_value = False
        return policy

    def test_for_permission_defaults(self):
        assert Gate.for_permission() == Gate(Visibility.ALL, None)
        assert Gate.for_permission("kick") == Gate(Visibility.PERMISSION, "kick")
        assert Gate.for_permission("kick", Visibility.OPS) == Gate(Visibility.OPS, "kick")

    def test_all_is_unconditional(self, player, policy):
        assert Gate(Visibility.ALL, "kick").is_visible_to(player, policy)
        policy.resolve.assert_not_called()

    def test_none_is_unconditional(self, operator, policy):
        policy.resolve.return_value = True
        assert not Gate(Visibility.NONE, "kick").is_visible_to(operator, policy)
        policy.resolve.assert_not_called()

    def test_ops(self, player, operator, policy):
        gate = Gate(Visibility.OPS)
        assert gate.is_visible_to(operator, policy)
        assert not gate.is_visible_to(player, policy)

    def test_permission_delegates_to_policy(self, player, policy):
        gate = Gate(Visibility.PERMISSION, "kick")
        assert not gate.is_visible_to(player, policy)
        policy.resolve.assert_called_once_with(player, "kick")
        policy.resolve.return_value = True
        assert gate.is_visible_to(player, policy)

    def test_permission_without_token(self, player, policy):
        assert Gate(Visibility.PERMISSION).is_visible_to(player, policy)
        policy.resolve.assert_not_called()

    def test_denial_with_permission_string(self):
        error = Gate(Visibility.PERMISSION, "kick").denial(NodePermissionPolicy("sworn"))
        assert isinstance(error, PermissionDenied)
        assert error.permission_string == "sworn.kick"
        assert '"&csworn.kick&4"' in error.message

    def test_generic_denial(self):
        for gate in (Gate(Visibility.OPS, "kick"), Gate(Visibility.NONE), Gate(Visibility.PERMISSION)):
            error = gate.denial(NodePermissionPolicy("sworn"))
            assert error.message == GENERIC_DENIAL
            assert error.permission_string is None


class TestSenders:
    """Tests for the bundled senders."""

    def test_permission_matches(self):
        assert permission_matches("*", "a.b")
        assert permission_matches("a.b", "A.B")
        assert permission_matches("a.*", "a")
        assert permission_matches("a.*", "a.b.c")
        assert not permission_matches("a.*", "ab")
        assert not permission_matches("a.b", "a.b.c")

    def test_operator_has_everything(self, operator):
        assert operator.has_permission("anything.at.all")

    def test_grant_and_revoke(self, player):
        player.grant("x.y")
        assert player.has_permission("x.y")
        player.revoke("x.y")
        assert not player.has_permission("x.y")

    def test_senders_follow_protocol(self, player, console, scripted):
        for sender in (player, console, scripted):
            assert isinstance(sender, Sender)

    def test_player_records_messages(self):
        player = PlayerSender("bob")
        player.send_message("§eHello §bbob")
        assert player.messages == ["§eHello §bbob"]
        assert player.plain_messages == ["Hello bob"]

    def test_console_strips_colors_when_not_a_tty(self, console):
        console.send_message("§cError: §4boom")
        assert console.stream.getvalue() == "Error: boom\n"

    def test_console_ansi_when_forced(self, console, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        console.send_message("§cred")
        assert console.stream.getvalue() == "\x1b[91mred\x1b[0m\n"

    def test_scripted_falls_back_to_text(self, scripted):
        from sworncmd.chat import TextComponent

        scripted.send_structured_message([TextComponent("a"), TextComponent("b")])
        assert scripted.messages == ["ab"]

    def test_display_name(self, player, console, scripted):
        assert display_name(player) == "alice"
        assert display_name(console) == "Console"
        assert display_name(scripted) == "CommandBlock (1, 64, -3)"

    def test_kinds(self, player, console, scripted):
        assert player.kind == SenderKind.PLAYER
        assert console.kind == SenderKind.CONSOLE
        assert scripted.kind == SenderKind.SCRIPTED
