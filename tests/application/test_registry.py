"""Tests for CommandRegistry and CommandFactory."""

from dataclasses import dataclass

import pytest

from gridbot.application.registry import CommandFactory, CommandRegistry
from gridbot.domain.commands import MoveCommand, PlaceCommand
from gridbot.domain.interfaces import CommandInterface, LineParserInterface, RobotInterface
from gridbot.domain.models import ExecutionResult, ParsedCommand


@dataclass(frozen=True)
class JumpCommand(CommandInterface):
    """Test command: two steps forward."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        robot.move().unwrap()
        robot.move().unwrap()
        return ExecutionResult.success()

    def __str__(self) -> str:
        return "JUMP"


@dataclass(frozen=True)
class TeleportCommand(CommandInterface):
    x: int

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return ExecutionResult.success()


class TeleportParser(LineParserInterface):
    command_name = "TELEPORT"

    def can_parse(self, line: str) -> bool:
        return line.upper().startswith("TELEPORT ")

    def parse(self, line: str) -> ParsedCommand | None:
        try:
            return ParsedCommand("TELEPORT", {"x": int(line.split()[1])})
        except (IndexError, ValueError):
            return None


class TestCommandRegistry:
    """Tests for name -> constructor registration."""

    def test_defaults_registered(self) -> None:
        registry = CommandRegistry()

        assert registry.names() == ["EXIT", "LEFT", "MOVE", "PLACE", "QUIT", "REPORT", "RIGHT"]

    def test_without_defaults_is_empty(self) -> None:
        assert CommandRegistry(include_defaults=False).names() == []

    def test_names_are_case_insensitive(self) -> None:
        registry = CommandRegistry()
        registry.register("jump", JumpCommand)

        assert registry.is_registered("JUMP")
        assert isinstance(registry.create("Jump"), JumpCommand)

    def test_create_with_params(self) -> None:
        command = CommandRegistry().create("PLACE", {"x": 1, "y": 2, "direction": "EAST"})

        assert command == PlaceCommand(1, 2, "EAST")

    def test_create_unknown_returns_none(self) -> None:
        assert CommandRegistry().create("JUMP") is None

    def test_create_with_bad_params_returns_none(self) -> None:
        """A constructor that raises yields None instead of propagating."""
        assert CommandRegistry().create("PLACE", {"bogus": 1}) is None

    def test_register_replaces_existing(self) -> None:
        registry = CommandRegistry()
        registry.register("MOVE", JumpCommand)

        assert isinstance(registry.create("MOVE"), JumpCommand)

    def test_register_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            CommandRegistry().register("MOVE", "not callable")  # type: ignore[arg-type]

    def test_unregister_and_clear(self) -> None:
        registry = CommandRegistry()

        registry.unregister("QUIT")
        assert not registry.is_registered("QUIT")

        registry.clear()
        assert registry.names() == []


class TestCommandFactory:
    """Tests for runtime extension through the factory."""

    def test_create_from_string(self) -> None:
        factory = CommandFactory()

        assert factory.create_from_string("MOVE") == MoveCommand()
        assert factory.create_from_string("PLACE 0,0,NORTH") == PlaceCommand(0, 0, "NORTH")
        assert factory.create_from_string("") is None

    def test_registered_command_becomes_parseable(self) -> None:
        factory = CommandFactory()
        assert factory.create_from_string("JUMP") is None

        factory.register_command("JUMP", JumpCommand)

        assert factory.create_from_string("jump") == JumpCommand()
        assert "JUMP" in factory.available_commands()

    def test_register_with_custom_parser(self) -> None:
        factory = CommandFactory()

        factory.register_command("TELEPORT", TeleportCommand, parser=TeleportParser())

        assert factory.create_from_string("teleport 3") == TeleportCommand(3)
        assert factory.create_from_string("teleport x") is None

    def test_reregistering_does_not_duplicate_parsers(self) -> None:
        factory = CommandFactory()
        before = len(factory.parsers)

        factory.register_command("MOVE", JumpCommand)

        assert len(factory.parsers) == before
        assert factory.create_from_string("MOVE") == JumpCommand()

    def test_parsed_but_unregistered_name_is_none(self) -> None:
        registry = CommandRegistry()
        factory = CommandFactory(registry=registry)
        registry.unregister("REPORT")

        assert factory.create_from_string("REPORT") is None
