"""
Command parsing: raw input lines to command objects.

Parsing is split into small strategies (one per command shape) that produce a
``ParsedCommand``; the factory turns that into a command via the registry.
A line nobody can parse yields None. Parse failures are never errors.
"""

import re
from typing import TYPE_CHECKING

from gridbot.domain.interfaces import CommandInterface, LineParserInterface
from gridbot.domain.models import Direction, ParsedCommand

if TYPE_CHECKING:
    from gridbot.application.registry import CommandFactory

_INTEGER = re.compile(r"^[+-]?\d+$")


def _split_command(line: str) -> tuple[str, str]:
    """Split a line into (upper-cased command word, remaining arguments)."""
    stripped = line.strip()
    match = re.match(r"^([A-Za-z_][A-Za-z0-9_]*)(.*)$", stripped, re.DOTALL)
    if not match:
        return "", ""
    return match.group(1).upper(), match.group(2).strip()


class SimpleCommandParser(LineParserInterface):
    """Parser for commands that take no parameters (MOVE, REPORT, ...)."""

    def __init__(self, command_name: str):
        self.command_name = command_name.strip().upper()

    def can_parse(self, line: str) -> bool:
        if not line or not line.strip():
            return False
        name, _ = _split_command(line)
        return name == self.command_name

    def parse(self, line: str) -> ParsedCommand | None:
        if not self.can_parse(line):
            return None
        return ParsedCommand(name=self.command_name, params={})


class PlaceCommandParser(LineParserInterface):
    """
    Parser for PLACE and its argument layouts.

    Accepted forms (case-insensitive, any whitespace around separators):
        PLACE X,Y,F
        PLACE X Y F
        PLACE (X,Y,F)

    Coordinates must be integers; negative values parse and are rejected
    later by the table. Non-numeric coordinates fail the parse.
    """

    command_name = "PLACE"

    def can_parse(self, line: str) -> bool:
        if not line or not line.strip():
            return False
        name, _ = _split_command(line)
        return name == self.command_name

    def parse(self, line: str) -> ParsedCommand | None:
        if not self.can_parse(line):
            return None
        _, args = _split_command(line)
        tokens = self._tokenize(args)
        if tokens is None:
            return None

        x, y, direction = tokens
        if not (_INTEGER.match(x) and _INTEGER.match(y)):
            return None
        direction = direction.upper()
        if direction not in Direction.names():
            return None

        return ParsedCommand(
            name=self.command_name,
            params={"x": int(x), "y": int(y), "direction": direction},
        )

    def _tokenize(self, args: str) -> list[str] | None:
        if args.startswith("(") and args.endswith(")"):
            args = args[1:-1].strip()
        if not args:
            return None
        if "," in args:
            tokens = [part.strip() for part in args.split(",")]
        else:
            tokens = args.split()
        if len(tokens) != 3 or not all(tokens):
            return None
        return tokens


class CommandParser:
    """
    Turns raw lines into commands.

    Example:
        parser = CommandParser()
        parser.parse("place 1 2 north")  # PlaceCommand(x=1, y=2, direction="NORTH")
        parser.parse("JUMP")             # None
    """

    def __init__(self, factory: "CommandFactory | None" = None):
        """
        Args:
            factory: Command factory (creates one with default commands if None)
        """
        # Lazy import to avoid circular dependency
        if factory is None:
            from gridbot.application.registry import CommandFactory

            factory = CommandFactory()

        self._factory = factory

    @property
    def factory(self) -> "CommandFactory":
        return self._factory

    def parse(self, command_string: str | None) -> CommandInterface | None:
        if not isinstance(command_string, str) or not command_string.strip():
            return None
        return self._factory.create_from_string(command_string.strip())

    def parse_many(self, command_strings: list[str]) -> list[CommandInterface]:
        """Parse several lines, dropping the ones that are not commands."""
        commands = (self.parse(line) for line in command_strings)
        return [command for command in commands if command is not None]

    def is_command(self, command_string: str) -> bool:
        return self.parse(command_string) is not None

    def available_commands(self) -> list[str]:
        return self._factory.available_commands()
