"""
Built-in robot commands.

Each command is an immutable value; executing it applies the command to a
robot and describes the effect as an ``ExecutionResult``.
"""

from dataclasses import dataclass
from typing import Any

from gridbot.domain.exceptions import ErrorKind, RobotError
from gridbot.domain.interfaces import CommandInterface, RobotInterface
from gridbot.domain.models import Direction, ExecutionResult, Outcome, Position

GOODBYE_MESSAGE = "Goodbye! Thanks for using Robot Challenge!"


def result_from_outcome(outcome: Outcome[Any]) -> ExecutionResult:
    """Map a silent robot outcome to SUCCESS or ERROR."""
    if outcome.error is not None:
        return ExecutionResult.error(outcome.message, outcome.error)
    return ExecutionResult.success()


@dataclass(frozen=True)
class PlaceCommand(CommandInterface):
    """PLACE X,Y,F - put the robot on the table."""

    x: int
    y: int
    direction: str

    def is_valid(self) -> bool:
        for coord in (self.x, self.y):
            if isinstance(coord, bool) or not isinstance(coord, int) or coord < 0:
                return False
        return str(self.direction).strip().upper() in Direction.names()

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        try:
            position = Position(self.x, self.y)
            direction = Direction.from_name(self.direction)
        except RobotError as e:
            return ExecutionResult.error(e.message, ErrorKind.INVALID_PLACEMENT)
        return result_from_outcome(robot.place(position, direction))

    def __str__(self) -> str:
        return f"PLACE {self.x},{self.y},{str(self.direction).upper()}"


@dataclass(frozen=True)
class MoveCommand(CommandInterface):
    """MOVE - one step forward; ignored at the table edge."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return result_from_outcome(robot.move())

    def __str__(self) -> str:
        return "MOVE"


@dataclass(frozen=True)
class LeftCommand(CommandInterface):
    """LEFT - rotate 90 degrees counter-clockwise."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return result_from_outcome(robot.turn_left())

    def __str__(self) -> str:
        return "LEFT"


@dataclass(frozen=True)
class RightCommand(CommandInterface):
    """RIGHT - rotate 90 degrees clockwise."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return result_from_outcome(robot.turn_right())

    def __str__(self) -> str:
        return "RIGHT"


@dataclass(frozen=True)
class ReportCommand(CommandInterface):
    """REPORT - announce position and direction."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        outcome = robot.report()
        if outcome.value is None:
            return result_from_outcome(outcome)
        return ExecutionResult.output(outcome.value)

    def __str__(self) -> str:
        return "REPORT"


@dataclass(frozen=True)
class ExitCommand(CommandInterface):
    """EXIT / QUIT - say goodbye and stop processing."""

    terminal = True

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return ExecutionResult.output(GOODBYE_MESSAGE)

    def __str__(self) -> str:
        return "EXIT"
