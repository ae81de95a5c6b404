"""Shared pytest fixtures for gridbot tests."""

import pytest

from gridbot.application.cache import RobotCache
from gridbot.application.dispatcher import CommandDispatcher
from gridbot.application.parser import CommandParser
from gridbot.application.processor import CommandProcessor
from gridbot.domain.models import Direction, Position, Table
from gridbot.domain.robot import Robot
from gridbot.infrastructure.cache.memory import InMemoryCacheBackend
from gridbot.infrastructure.formatters import TextOutputFormatter
from gridbot.infrastructure.sinks import CollectingOutputSink


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def table() -> Table:
    """Default 5x5 table."""
    return Table(5, 5)


@pytest.fixture
def robot(table: Table) -> Robot:
    """Unplaced robot on the default table."""
    return Robot(table)


@pytest.fixture
def placed_robot(robot: Robot) -> Robot:
    """Robot at the origin facing north."""
    robot.place(Position(0, 0), Direction.NORTH)
    return robot


@pytest.fixture
def sink() -> CollectingOutputSink:
    return CollectingOutputSink()


@pytest.fixture
def dispatcher(robot: Robot) -> CommandDispatcher:
    return CommandDispatcher(robot, TextOutputFormatter())


@pytest.fixture
def processor(
    robot: Robot, dispatcher: CommandDispatcher, sink: CollectingOutputSink
) -> CommandProcessor:
    """Plain text pipeline over the unplaced robot, output collected in ``sink``."""
    return CommandProcessor(robot, CommandParser(), dispatcher, sink)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> InMemoryCacheBackend:
    """In-memory cache backend driven by the fake clock."""
    return InMemoryCacheBackend(clock=clock)


@pytest.fixture
def cache(memory_backend: InMemoryCacheBackend) -> RobotCache:
    """Cache service with a 60 second TTL."""
    return RobotCache(memory_backend, namespace="test", ttl=60)
