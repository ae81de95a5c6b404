"""Tests for entry-point command discovery."""

from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from gridbot.application.registry import CommandFactory
from gridbot.domain.interfaces import CommandInterface, RobotInterface
from gridbot.domain.models import ExecutionResult
from gridbot.infrastructure import plugins


@dataclass(frozen=True)
class WaveCommand(CommandInterface):
    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return ExecutionResult.output("o/")


def _entry_point(name: str, loaded=None, error: Exception | None = None) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = loaded
    return ep


class TestDiscoverCommands:
    """Tests for discover_commands()."""

    def test_registers_entry_point_commands(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            plugins, "entry_points", lambda group: [_entry_point("wave", WaveCommand)]
        )
        factory = CommandFactory()

        registered = plugins.discover_commands(factory)

        assert registered == ["WAVE"]
        assert factory.create_from_string("WAVE") == WaveCommand()

    def test_uses_gridbot_group(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen = []
        monkeypatch.setattr(plugins, "entry_points", lambda group: seen.append(group) or [])

        plugins.discover_commands(CommandFactory())

        assert seen == ["gridbot.commands"]

    def test_broken_entry_point_warns_and_continues(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            plugins,
            "entry_points",
            lambda group: [
                _entry_point("broken", error=ImportError("missing module")),
                _entry_point("wave", WaveCommand),
            ],
        )
        factory = CommandFactory()

        with pytest.warns(UserWarning, match="broken"):
            registered = plugins.discover_commands(factory)

        assert registered == ["WAVE"]
        assert factory.create_from_string("broken") is None

    def test_non_callable_entry_point_is_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            plugins, "entry_points", lambda group: [_entry_point("bad", "not callable")]
        )

        with pytest.warns(UserWarning):
            assert plugins.discover_commands(CommandFactory()) == []
