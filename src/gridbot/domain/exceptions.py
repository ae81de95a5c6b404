"""
Domain exceptions for the robot simulator.

These represent business rule violations in the domain layer. Robot
operations report expected failures through ``Outcome`` values; the
exceptions below are raised by value-object construction and by backends,
and are converted to ``ExecutionResult`` errors at the dispatcher boundary.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of a failed command execution."""

    INVALID_POSITION = "invalid_position"  # Off the table or malformed
    INVALID_DIRECTION = "invalid_direction"  # Unknown direction name
    NOT_PLACED = "robot_not_placed"  # Acting before a successful PLACE
    INVALID_PLACEMENT = "invalid_placement"  # PLACE arguments could not be built
    INVALID_COMMAND = "invalid_command"  # Command parameters failed is_valid()
    EXECUTION_ERROR = "execution_error"  # Anything else raised by a command


class RobotError(Exception):
    """Base class for domain errors carrying an ``ErrorKind``."""

    kind: ErrorKind = ErrorKind.EXECUTION_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPosition(RobotError):
    """Raised when a position is outside the table or cannot be built."""

    kind = ErrorKind.INVALID_POSITION


class InvalidDirection(RobotError):
    """Raised when a direction name is not one of the four compass points."""

    kind = ErrorKind.INVALID_DIRECTION


class NotPlaced(RobotError):
    """Raised when an operation needs a placed robot and there is none."""

    kind = ErrorKind.NOT_PLACED


class CacheUnavailable(Exception):
    """
    Raised by cache backends when the underlying store cannot be reached.

    Never surfaced to the command pipeline: ``RobotCache`` absorbs it and
    degrades to a miss.
    """

    def __init__(self, message: str, backend: str = "unknown"):
        super().__init__(message)
        self.backend = backend


def error_for(kind: ErrorKind, message: str) -> RobotError:
    """Build the exception matching an error kind."""
    for error_class in (InvalidPosition, InvalidDirection, NotPlaced):
        if error_class.kind is kind:
            return error_class(message)
    error = RobotError(message)
    error.kind = kind
    return error
