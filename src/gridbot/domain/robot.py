"""
Robot: the stateful agent that moves on the table.

The robot is either placed (position and direction both set) or unplaced
(both unset). Operations return an ``Outcome``; nothing here raises for
ordinary command failures.
"""

from datetime import datetime, timezone

from gridbot.domain.exceptions import ErrorKind
from gridbot.domain.interfaces import RobotInterface
from gridbot.domain.models import Direction, Outcome, Position, RobotSnapshot, Table

NOT_PLACED_MESSAGE = "Robot must be placed before {action}"


class Robot(RobotInterface):
    """A single robot on a single table."""

    def __init__(self, table: Table):
        """
        Args:
            table: The grid the robot lives on
        """
        self._table = table
        self._position: Position | None = None
        self._direction: Direction | None = None

    @property
    def table(self) -> Table:
        return self._table

    @property
    def position(self) -> Position | None:
        return self._position

    @property
    def direction(self) -> Direction | None:
        return self._direction

    @property
    def placed(self) -> bool:
        return self._position is not None and self._direction is not None

    def place(self, position: Position, direction: Direction) -> Outcome["Robot"]:
        """Put the robot on the table, replacing any previous state."""
        if not isinstance(direction, Direction):
            return Outcome.fail(
                ErrorKind.INVALID_DIRECTION, f"Invalid direction: {direction!r}"
            )
        if not self._table.is_valid(position):
            return Outcome.fail(
                ErrorKind.INVALID_POSITION,
                f"Position {position} is outside table boundaries",
            )
        self._position = position
        self._direction = direction
        return Outcome.ok(self)

    def move(self) -> Outcome["Robot"]:
        """Step forward one cell. Stepping off the table is ignored."""
        if self._position is None or self._direction is None:
            return self._not_placed("moving")
        candidate = self._position.move(*self._direction.delta)
        if self._table.is_valid(candidate):
            self._position = candidate
        return Outcome.ok(self)

    def turn_left(self) -> Outcome["Robot"]:
        if self._direction is None or self._position is None:
            return self._not_placed("turning")
        self._direction = self._direction.turn_left()
        return Outcome.ok(self)

    def turn_right(self) -> Outcome["Robot"]:
        if self._direction is None or self._position is None:
            return self._not_placed("turning")
        self._direction = self._direction.turn_right()
        return Outcome.ok(self)

    def report(self) -> Outcome[str]:
        if not self.placed:
            return self._not_placed("reporting")
        return Outcome.ok(f"{self._position},{self._direction}")

    def state_signature(self) -> str:
        if not self.placed:
            return "unplaced"
        return f"{self._position},{self._direction}"

    def snapshot(self) -> RobotSnapshot:
        return RobotSnapshot(
            position=self._position,
            direction=self._direction,
            table_width=self._table.width,
            table_height=self._table.height,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def restore(self, snapshot: RobotSnapshot) -> Outcome["Robot"]:
        """
        Reset state from a snapshot.

        An unplaced snapshot clears the robot. A placed snapshot goes through
        the same boundary check as ``place``.
        """
        if snapshot.position is None or snapshot.direction is None:
            self._position = None
            self._direction = None
            return Outcome.ok(self)
        return self.place(snapshot.position, snapshot.direction)

    def _not_placed(self, action: str) -> Outcome:
        return Outcome.fail(
            ErrorKind.NOT_PLACED, NOT_PLACED_MESSAGE.format(action=action)
        )

    def __str__(self) -> str:
        if not self.placed:
            return "Robot not placed"
        return f"Robot at {self._position} facing {self._direction}"

    def __repr__(self) -> str:
        return (
            f"Robot(position={self._position!r}, direction={self._direction!r}, "
            f"table={self._table!r})"
        )
