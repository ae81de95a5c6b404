"""
Command registry and factory.

The registry maps command names to constructors; the factory pairs it with
the line parsers so that new command types can be added at runtime without
touching the pipeline:

    factory = CommandFactory()
    factory.register_command("JUMP", JumpCommand)
    factory.create_from_string("jump")  # JumpCommand()
"""

import logging
from collections.abc import Callable
from typing import Any

from gridbot.application.parser import PlaceCommandParser, SimpleCommandParser
from gridbot.domain.commands import (
    ExitCommand,
    LeftCommand,
    MoveCommand,
    PlaceCommand,
    ReportCommand,
    RightCommand,
)
from gridbot.domain.interfaces import CommandInterface, LineParserInterface

logger = logging.getLogger(__name__)

CommandConstructor = Callable[..., CommandInterface]

DEFAULT_COMMANDS: dict[str, CommandConstructor] = {
    "PLACE": PlaceCommand,
    "MOVE": MoveCommand,
    "LEFT": LeftCommand,
    "RIGHT": RightCommand,
    "REPORT": ReportCommand,
    "EXIT": ExitCommand,
    "QUIT": ExitCommand,
}


class CommandRegistry:
    """
    Name -> constructor mapping.

    Names are case-insensitive. Registering an existing name replaces its
    constructor. ``create`` never raises: a constructor that fails yields None.
    """

    def __init__(self, include_defaults: bool = True):
        """
        Args:
            include_defaults: Register the built-in commands
        """
        self._constructors: dict[str, CommandConstructor] = {}
        if include_defaults:
            for name, constructor in DEFAULT_COMMANDS.items():
                self.register(name, constructor)

    def register(self, name: str, constructor: CommandConstructor) -> None:
        """
        Register (or replace) a command constructor.

        Args:
            name: Command identifier (e.g., "MOVE")
            constructor: Callable taking the parsed params as keyword arguments
        """
        if not callable(constructor):
            raise TypeError(f"Constructor for '{name}' must be callable")
        self._constructors[self._key(name)] = constructor

    def unregister(self, name: str) -> None:
        self._constructors.pop(self._key(name), None)

    def is_registered(self, name: str) -> bool:
        return self._key(name) in self._constructors

    def names(self) -> list[str]:
        return sorted(self._constructors)

    def create(
        self, name: str, params: dict[str, Any] | None = None
    ) -> CommandInterface | None:
        """
        Build a command instance.

        Args:
            name: Registered command name
            params: Keyword arguments for the constructor

        Returns:
            The command, or None if the name is unknown or construction fails
        """
        constructor = self._constructors.get(self._key(name))
        if constructor is None:
            return None
        try:
            return constructor(**(params or {}))
        except Exception as e:
            logger.debug("Could not construct command %s(%s): %s", name, params, e)
            return None

    def clear(self) -> None:
        """Remove every registration, including the defaults."""
        self._constructors.clear()

    @staticmethod
    def _key(name: str) -> str:
        return str(name).strip().upper()


class CommandFactory:
    """Creates commands from raw strings using registered parsers."""

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        parsers: list[LineParserInterface] | None = None,
    ):
        """
        Args:
            registry: Command registry (default commands if None)
            parsers: Line parsers, tried in order (PLACE + simple commands if None)
        """
        self._registry = registry if registry is not None else CommandRegistry()
        self._parsers: list[LineParserInterface] = []
        if parsers is None:
            self._register_default_parsers()
        else:
            self._parsers.extend(parsers)

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def parsers(self) -> list[LineParserInterface]:
        return list(self._parsers)

    def create_from_string(self, command_string: str) -> CommandInterface | None:
        if not command_string or not command_string.strip():
            return None

        for parser in self._parsers:
            if not parser.can_parse(command_string):
                continue
            parsed = parser.parse(command_string)
            if parsed is not None and self._registry.is_registered(parsed.name):
                return self._registry.create(parsed.name, parsed.params)

        return None

    def register_command(
        self,
        name: str,
        constructor: CommandConstructor,
        parser: LineParserInterface | None = None,
    ) -> None:
        """
        Register a command type, making it reachable from text input.

        Without an explicit parser, a parameterless parser is added for the
        name unless one already handles it.
        """
        self._registry.register(name, constructor)
        if parser is not None:
            self.register_parser(parser)
        elif not self._handles(name):
            self.register_parser(SimpleCommandParser(name))

    def register_parser(self, parser: LineParserInterface) -> None:
        self._parsers.append(parser)

    def available_commands(self) -> list[str]:
        return self._registry.names()

    def _handles(self, name: str) -> bool:
        key = name.strip().upper()
        return any(getattr(p, "command_name", None) == key for p in self._parsers)

    def _register_default_parsers(self) -> None:
        # PLACE first: it is the only parser with arguments
        self.register_parser(PlaceCommandParser())
        for name in DEFAULT_COMMANDS:
            if name != "PLACE":
                self.register_parser(SimpleCommandParser(name))
