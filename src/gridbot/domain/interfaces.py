"""
Domain interfaces (Ports) for the robot simulator.

These abstract base classes define the contracts that implementations must satisfy.
They have no external dependencies and represent the core domain boundaries.
Decorators (state caching, result caching) implement the same port as the
object they wrap and forward each method explicitly.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gridbot.domain.models import (
        Direction,
        ExecutionResult,
        Outcome,
        ParsedCommand,
        Position,
        ProcessSignal,
        RobotSnapshot,
        Table,
    )


class TableInterface(ABC):
    """Port for the bounded grid."""

    width: int
    height: int

    @abstractmethod
    def is_valid(self, position: "Position") -> bool:
        """Return True if the position lies on the table."""
        pass


class RobotInterface(ABC):
    """
    Port for robot operations.

    Mutating operations return an ``Outcome`` instead of raising for expected
    domain failures (off-table placement, acting before placement).
    """

    @property
    @abstractmethod
    def table(self) -> "Table":
        pass

    @property
    @abstractmethod
    def position(self) -> "Position | None":
        pass

    @property
    @abstractmethod
    def direction(self) -> "Direction | None":
        pass

    @property
    @abstractmethod
    def placed(self) -> bool:
        pass

    @abstractmethod
    def place(self, position: "Position", direction: "Direction") -> "Outcome[Any]":
        pass

    @abstractmethod
    def move(self) -> "Outcome[Any]":
        pass

    @abstractmethod
    def turn_left(self) -> "Outcome[Any]":
        pass

    @abstractmethod
    def turn_right(self) -> "Outcome[Any]":
        pass

    @abstractmethod
    def report(self) -> "Outcome[str]":
        pass

    @abstractmethod
    def state_signature(self) -> str:
        """Compact state encoding: ``"unplaced"`` or ``"x,y,DIRECTION"``."""
        pass

    @abstractmethod
    def snapshot(self) -> "RobotSnapshot":
        pass

    @abstractmethod
    def restore(self, snapshot: "RobotSnapshot") -> "Outcome[Any]":
        pass


class CommandInterface(ABC):
    """
    Port for an executable command.

    Commands are immutable. ``is_valid`` checks the command's own parameters
    only; robot-state preconditions are checked by ``execute``.
    """

    terminal: bool = False

    @property
    def name(self) -> str:
        """Command name used for registration (e.g., ``"MOVE"``)."""
        return type(self).__name__.removesuffix("Command").upper()

    def is_valid(self) -> bool:
        return True

    @abstractmethod
    def execute(self, robot: RobotInterface) -> "ExecutionResult":
        """
        Apply the command to the robot.

        Args:
            robot: The robot to act on

        Returns:
            ExecutionResult describing what happened
        """
        pass


class LineParserInterface(ABC):
    """Port for one strategy that turns a raw line into a ParsedCommand."""

    @abstractmethod
    def can_parse(self, line: str) -> bool:
        pass

    @abstractmethod
    def parse(self, line: str) -> "ParsedCommand | None":
        """Return the parsed command, or None if the line is malformed."""
        pass


class CommandProcessorInterface(ABC):
    """Port for the top-level command pipeline."""

    @property
    @abstractmethod
    def robot(self) -> RobotInterface:
        pass

    @abstractmethod
    def parse(self, command_string: str) -> "CommandInterface | None":
        pass

    @abstractmethod
    def execute(self, command_string: str) -> "ExecutionResult | None":
        """Parse and dispatch one line. None means the line was not a command."""
        pass

    @abstractmethod
    def execute_command(
        self, command: "CommandInterface | None"
    ) -> "ExecutionResult | None":
        """Dispatch an already-parsed command."""
        pass

    @abstractmethod
    def emit(self, result: "ExecutionResult") -> None:
        """Render a result and hand it to the output sink."""
        pass

    @abstractmethod
    def process(self, command_string: str) -> "ProcessSignal":
        """Execute and emit one line. Never raises."""
        pass

    @abstractmethod
    def register_command(self, name: str, constructor: Any) -> None:
        pass

    @abstractmethod
    def available_commands(self) -> list[str]:
        pass


class CacheBackendInterface(ABC):
    """
    Port for a namespaced key-value store with per-key TTL.

    Implementations raise ``CacheUnavailable`` when the store cannot be
    reached; callers decide how to degrade.
    """

    @abstractmethod
    def set_with_ttl(self, key: str, value: str, ttl: int) -> None:
        pass

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        pass

    @abstractmethod
    def keys_matching(self, pattern: str) -> list[str]:
        """Live keys matching a glob pattern (``*`` wildcard)."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        pass

    def info(self) -> dict[str, Any]:
        """Backend-specific diagnostics for stats and health checks."""
        return {}


class OutputFormatterInterface(ABC):
    """Port for presentation of results. None means print nothing."""

    @abstractmethod
    def format_report(self, robot: RobotInterface) -> str | None:
        pass

    @abstractmethod
    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        pass

    @abstractmethod
    def format_success(self, message: str | None = None) -> str | None:
        pass

    @abstractmethod
    def format_goodbye(self) -> str | None:
        pass


class OutputSinkInterface(ABC):
    """Port for wherever formatted messages end up."""

    @abstractmethod
    def write(self, message: str) -> None:
        pass
