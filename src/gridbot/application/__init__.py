"""
Application layer for the robot simulator.

Contains the command pipeline (parse, dispatch, output) and the caching
decorators that wrap it.
"""

from gridbot.application.cache import (
    CacheableRobot,
    CachedCommandProcessor,
    RobotCache,
    command_cache_key,
)
from gridbot.application.dispatcher import CommandDispatcher
from gridbot.application.parser import (
    CommandParser,
    PlaceCommandParser,
    SimpleCommandParser,
)
from gridbot.application.processor import CommandProcessor, process_lines
from gridbot.application.registry import CommandFactory, CommandRegistry

__all__ = [
    "CacheableRobot",
    "CachedCommandProcessor",
    "CommandDispatcher",
    "CommandFactory",
    "CommandParser",
    "CommandProcessor",
    "CommandRegistry",
    "PlaceCommandParser",
    "RobotCache",
    "SimpleCommandParser",
    "command_cache_key",
    "process_lines",
]
