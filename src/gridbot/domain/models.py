"""
Domain models for the robot simulator.

These are pure data structures: positions, directions, the table, and the
values that flow through the command pipeline. Everything except the robot
itself is immutable (frozen dataclasses or enums).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from gridbot.domain.exceptions import (
    ErrorKind,
    InvalidDirection,
    InvalidPosition,
    error_for,
)

T = TypeVar("T")


# =============================================================================
# GRID MODEL
# =============================================================================


@dataclass(frozen=True)
class Position:
    """Integer cell coordinates on the table."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if isinstance(self.x, bool) or not isinstance(self.x, int):
            raise InvalidPosition(f"Position x must be an integer, got {self.x!r}")
        if isinstance(self.y, bool) or not isinstance(self.y, int):
            raise InvalidPosition(f"Position y must be an integer, got {self.y!r}")

    def move(self, dx: int, dy: int) -> "Position":
        """Return a new position offset by the given deltas."""
        return Position(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


class Direction(Enum):
    """Compass direction the robot faces. Declared in clockwise order."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        """
        Look up a direction by name, ignoring case and surrounding whitespace.

        Raises:
            InvalidDirection: If the name is not a compass direction
        """
        key = str(name).strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise InvalidDirection(
                f"Invalid direction: {name}. Must be one of {', '.join(cls.names())}"
            ) from None

    @classmethod
    def names(cls) -> list[str]:
        return [d.value for d in cls]

    @property
    def delta(self) -> tuple[int, int]:
        """Movement vector (dx, dy) for one step forward."""
        return _DELTAS[self]

    def turn_left(self) -> "Direction":
        """Rotate 90 degrees counter-clockwise."""
        order = list(Direction)
        return order[(order.index(self) - 1) % len(order)]

    def turn_right(self) -> "Direction":
        """Rotate 90 degrees clockwise."""
        order = list(Direction)
        return order[(order.index(self) + 1) % len(order)]

    def __str__(self) -> str:
        return self.value


_DELTAS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Table:
    """Bounded rectangular grid. Cell (0, 0) is the south-west corner."""

    width: int = 5
    height: int = 5

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Table dimensions must be non-negative, got {self.width}x{self.height}"
            )

    def is_valid(self, position: object) -> bool:
        if not isinstance(position, Position):
            return False
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def positions(self) -> list[Position]:
        """All cells, row by row from the south edge."""
        return [Position(x, y) for y in range(self.height) for x in range(self.width)]

    def __str__(self) -> str:
        return f"{self.width}x{self.height} table"


# =============================================================================
# OPERATION OUTCOMES
# =============================================================================


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a robot operation: a value, or an error kind with a message."""

    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Outcome[T]":
        return cls(error=kind, message=message)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """
        Return the value, raising the matching domain error on failure.

        Raises:
            RobotError: InvalidPosition, InvalidDirection or NotPlaced
        """
        if self.error is not None:
            raise error_for(self.error, self.message)
        return self.value  # type: ignore[return-value]


class ResultStatus(Enum):
    """How the dispatcher should route an execution result."""

    SUCCESS = "success"  # Command applied, nothing to show
    OUTPUT = "output"  # Message for the user (REPORT, EXIT)
    ERROR = "error"  # Command rejected


@dataclass(frozen=True)
class ExecutionResult:
    """Immutable outcome of executing one command against the robot."""

    status: ResultStatus
    message: str | None = None
    data: Any = None
    error_kind: ErrorKind | None = None

    @classmethod
    def success(cls, data: Any = None) -> "ExecutionResult":
        return cls(status=ResultStatus.SUCCESS, data=data)

    @classmethod
    def output(cls, message: str) -> "ExecutionResult":
        return cls(status=ResultStatus.OUTPUT, message=message)

    @classmethod
    def error(
        cls, message: str, kind: ErrorKind = ErrorKind.EXECUTION_ERROR
    ) -> "ExecutionResult":
        return cls(status=ResultStatus.ERROR, message=message, error_kind=kind)

    @property
    def is_error(self) -> bool:
        return self.status is ResultStatus.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.data,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExecutionResult":
        """Deserialize from ``to_dict`` output."""
        error_kind = data.get("error_kind")
        return cls(
            status=ResultStatus(data["status"]),
            message=data.get("message"),
            data=data.get("data"),
            error_kind=ErrorKind(error_kind) if error_kind else None,
        )


class ProcessSignal(Enum):
    """Whether the caller should keep feeding commands."""

    CONTINUE = "continue"
    TERMINATE = "terminate"


# =============================================================================
# PARSING AND CACHING PAYLOADS
# =============================================================================


@dataclass(frozen=True)
class ParsedCommand:
    """Command name and constructor parameters extracted from a line."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RobotSnapshot:
    """Point-in-time robot state, as stored by state caching."""

    position: Position | None
    direction: Direction | None
    table_width: int
    table_height: int
    timestamp: str  # ISO timestamp

    @property
    def placed(self) -> bool:
        return self.position is not None and self.direction is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": (
                {"x": self.position.x, "y": self.position.y}
                if self.position
                else None
            ),
            "direction": self.direction.value if self.direction else None,
            "placed": self.placed,
            "table": {"width": self.table_width, "height": self.table_height},
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RobotSnapshot":
        position = data.get("position")
        direction = data.get("direction")
        table = data.get("table") or {}
        return cls(
            position=Position(int(position["x"]), int(position["y"]))
            if position
            else None,
            direction=Direction.from_name(direction) if direction else None,
            table_width=int(table.get("width", 0)),
            table_height=int(table.get("height", 0)),
            timestamp=data.get("timestamp", ""),
        )
