"""
Domain layer for the robot simulator.

Contains core business logic with no external dependencies.
"""

from gridbot.domain.commands import (
    ExitCommand,
    LeftCommand,
    MoveCommand,
    PlaceCommand,
    ReportCommand,
    RightCommand,
)
from gridbot.domain.exceptions import (
    CacheUnavailable,
    ErrorKind,
    InvalidDirection,
    InvalidPosition,
    NotPlaced,
    RobotError,
)
from gridbot.domain.interfaces import (
    CacheBackendInterface,
    CommandInterface,
    CommandProcessorInterface,
    LineParserInterface,
    OutputFormatterInterface,
    OutputSinkInterface,
    RobotInterface,
    TableInterface,
)
from gridbot.domain.models import (
    Direction,
    ExecutionResult,
    Outcome,
    ParsedCommand,
    Position,
    ProcessSignal,
    ResultStatus,
    RobotSnapshot,
    Table,
)
from gridbot.domain.robot import Robot

__all__ = [
    # Models
    "Position",
    "Direction",
    "Table",
    "Outcome",
    "ExecutionResult",
    "ResultStatus",
    "ProcessSignal",
    "ParsedCommand",
    "RobotSnapshot",
    "Robot",
    # Commands
    "PlaceCommand",
    "MoveCommand",
    "LeftCommand",
    "RightCommand",
    "ReportCommand",
    "ExitCommand",
    # Interfaces
    "TableInterface",
    "RobotInterface",
    "CommandInterface",
    "CommandProcessorInterface",
    "LineParserInterface",
    "CacheBackendInterface",
    "OutputFormatterInterface",
    "OutputSinkInterface",
    # Exceptions
    "ErrorKind",
    "RobotError",
    "InvalidPosition",
    "InvalidDirection",
    "NotPlaced",
    "CacheUnavailable",
]
