"""
Composition root: builds the processor stack from settings.

    table -> robot [-> CacheableRobot] -> factory (+ plugins)
          -> dispatcher -> processor [-> CachedCommandProcessor]
"""

import logging

from gridbot.application.cache import CacheableRobot, CachedCommandProcessor, RobotCache
from gridbot.application.dispatcher import CommandDispatcher
from gridbot.application.parser import CommandParser
from gridbot.application.processor import CommandProcessor
from gridbot.application.registry import CommandFactory
from gridbot.domain.exceptions import CacheUnavailable
from gridbot.domain.interfaces import (
    CacheBackendInterface,
    CommandProcessorInterface,
    OutputSinkInterface,
    RobotInterface,
)
from gridbot.domain.models import Table
from gridbot.domain.robot import Robot
from gridbot.infrastructure.cache import (
    InMemoryCacheBackend,
    NullCacheBackend,
    RedisCacheBackend,
)
from gridbot.infrastructure.formatters import create_formatter
from gridbot.infrastructure.plugins import discover_commands
from gridbot.runtime.config import ConfigurationError, RobotSettings

logger = logging.getLogger(__name__)


def build_backend(settings: RobotSettings) -> CacheBackendInterface:
    """
    Pick the cache backend named in the settings.

    An unreachable Redis server is replaced by a NullCacheBackend so that the
    simulator still runs, just without caching.

    Raises:
        ConfigurationError: If the Redis URL cannot be parsed
    """
    if settings.cache_backend == "memory":
        return InMemoryCacheBackend()
    if settings.cache_backend == "redis":
        try:
            backend = RedisCacheBackend(settings.redis_url)
        except ValueError as e:
            raise ConfigurationError(f"Invalid Redis URL {settings.redis_url!r}: {e}") from e
        try:
            backend.ping()
        except CacheUnavailable as e:
            logger.warning("Redis unavailable at %s, caching disabled: %s", settings.redis_url, e)
            return NullCacheBackend()
        logger.info("Redis connected: %s", settings.redis_url)
        return backend
    return NullCacheBackend()


def build_cache(settings: RobotSettings) -> RobotCache | None:
    if not settings.cache_enabled:
        return None
    return RobotCache(
        build_backend(settings),
        namespace=settings.cache_namespace,
        ttl=settings.cache_ttl,
    )


def build_processor(
    settings: RobotSettings,
    sink: OutputSinkInterface,
    robot_id: str | None = None,
    cache: RobotCache | None = None,
    load_plugins: bool = True,
) -> CommandProcessorInterface:
    """
    Wire a ready-to-use processor.

    Args:
        settings: Validated settings
        sink: Where rendered output goes
        robot_id: Cache scope; when given, state is resumed from the cache
        cache: Cache service (built from settings if None and caching is on)
        load_plugins: Register commands published by installed packages
    """
    if cache is None:
        cache = build_cache(settings)

    robot: RobotInterface = Robot(Table(settings.table_width, settings.table_height))
    strategy = settings.cache_strategy
    if cache is not None and strategy in ("state", "both"):
        cacheable = CacheableRobot(robot, cache, robot_id=robot_id)
        if robot_id is not None and cacheable.load_from_cache():
            logger.info("Resumed %s from cache: %s", robot_id, cacheable.state_signature())
        robot = cacheable

    factory = CommandFactory()
    if load_plugins:
        discover_commands(factory)

    dispatcher = CommandDispatcher(robot, create_formatter(settings.output_format))
    processor: CommandProcessorInterface = CommandProcessor(
        robot, CommandParser(factory), dispatcher, sink
    )
    if cache is not None and strategy in ("result", "both"):
        processor = CachedCommandProcessor(
            processor, cache, robot_id=robot_id, restore_state=strategy == "both"
        )
    return processor
