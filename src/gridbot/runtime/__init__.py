"""
Runtime layer: configuration, composition root and command line interface.
"""

from gridbot.runtime.bootstrap import build_backend, build_cache, build_processor
from gridbot.runtime.config import ConfigurationError, RobotSettings

__all__ = [
    "ConfigurationError",
    "RobotSettings",
    "build_backend",
    "build_cache",
    "build_processor",
]
