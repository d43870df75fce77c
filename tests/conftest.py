"generic fixtures"

import pytest

from sworncmd.commands import Command
from sworncmd.senders import ConsoleSender, PlayerSender, ScriptedSender


def pytest_configure():
    "Runs once before all"
    from sworncmd.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


class RecordingCommand(Command):
    """Command keeping the arguments of every call."""

    def __init__(self, name, **kwargs):
        super().__init__(name, **kwargs)
        self.calls = []

    def perform(self, ctx):
        self.calls.append(ctx.args)


@pytest.fixture
def player():
    return PlayerSender("alice")


@pytest.fixture
def operator():
    return PlayerSender("root", operator=True)


@pytest.fixture
def scripted():
    return ScriptedSender(location=(1, 64, -3))


@pytest.fixture
def console(monkeypatch):
    import io

    monkeypatch.delenv("FORCE_COLOR", raising=False)
    return ConsoleSender(stream=io.StringIO())


@pytest.fixture
def recording():
    "Factory of RecordingCommand"
    return RecordingCommand
