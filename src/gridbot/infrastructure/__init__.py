"""
Infrastructure layer for the robot simulator.

Contains adapters for external concerns (cache stores, output, plugins).
"""

from gridbot.infrastructure.cache import (
    InMemoryCacheBackend,
    NullCacheBackend,
    RedisCacheBackend,
)
from gridbot.infrastructure.formatters import (
    CsvOutputFormatter,
    JsonOutputFormatter,
    QuietOutputFormatter,
    TextOutputFormatter,
    XmlOutputFormatter,
    create_formatter,
)
from gridbot.infrastructure.plugins import discover_commands
from gridbot.infrastructure.sinks import (
    CallbackOutputSink,
    CollectingOutputSink,
    StreamOutputSink,
)

__all__ = [
    # Cache
    "InMemoryCacheBackend",
    "NullCacheBackend",
    "RedisCacheBackend",
    # Output
    "TextOutputFormatter",
    "JsonOutputFormatter",
    "XmlOutputFormatter",
    "CsvOutputFormatter",
    "QuietOutputFormatter",
    "create_formatter",
    "StreamOutputSink",
    "CollectingOutputSink",
    "CallbackOutputSink",
    # Plugins
    "discover_commands",
]
