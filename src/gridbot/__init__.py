"""
gridbot: a toy robot on a bounded grid.

Text commands drive a robot around a table; a pluggable command pipeline
parses, dispatches and formats them, and optional caching stores robot state
and command results.

Example:
    from gridbot import CommandProcessor, CommandParser, CommandDispatcher, Robot, Table
    from gridbot.infrastructure import CollectingOutputSink, TextOutputFormatter

    robot = Robot(Table(5, 5))
    sink = CollectingOutputSink()
    processor = CommandProcessor(
        robot, CommandParser(), CommandDispatcher(robot, TextOutputFormatter()), sink
    )
    for line in ["PLACE 0,0,NORTH", "MOVE", "REPORT"]:
        processor.process(line)
    sink.messages  # ["0,1,NORTH"]
"""

# Application layer (pipeline and caching)
from gridbot.application.cache import CacheableRobot, CachedCommandProcessor, RobotCache
from gridbot.application.dispatcher import CommandDispatcher
from gridbot.application.parser import CommandParser
from gridbot.application.processor import CommandProcessor, process_lines
from gridbot.application.registry import CommandFactory, CommandRegistry

# Domain exceptions
from gridbot.domain.exceptions import CacheUnavailable, ErrorKind, RobotError

# Domain interfaces (for custom commands, backends and formatters)
from gridbot.domain.interfaces import (
    CacheBackendInterface,
    CommandInterface,
    OutputFormatterInterface,
    OutputSinkInterface,
    RobotInterface,
)
from gridbot.domain.models import (
    Direction,
    ExecutionResult,
    Outcome,
    Position,
    ProcessSignal,
    ResultStatus,
    Table,
)
from gridbot.domain.robot import Robot

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Position",
    "Direction",
    "Table",
    "Robot",
    "Outcome",
    "ExecutionResult",
    "ResultStatus",
    "ProcessSignal",
    # Interfaces
    "RobotInterface",
    "CommandInterface",
    "CacheBackendInterface",
    "OutputFormatterInterface",
    "OutputSinkInterface",
    # Exceptions
    "ErrorKind",
    "RobotError",
    "CacheUnavailable",
    # Application
    "CommandParser",
    "CommandRegistry",
    "CommandFactory",
    "CommandDispatcher",
    "CommandProcessor",
    "process_lines",
    "RobotCache",
    "CacheableRobot",
    "CachedCommandProcessor",
]
