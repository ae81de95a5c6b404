"""
Result caching for the command pipeline.

Three pieces:

- ``RobotCache``: namespaced JSON cache service over a ``CacheBackendInterface``.
  Every method degrades to a miss/no-op when the backend fails, so the
  pipeline behaves the same with or without a working store.
- ``CacheableRobot``: state caching. Wraps a robot and stores a snapshot under
  ``robot:{id}:state`` after every successful mutation.
- ``CachedCommandProcessor``: command-result caching. Wraps a processor and
  short-circuits repeated (command, robot state) pairs.

Key layout (all prefixed with ``{namespace}:``):

    robot:{robot_id}:state
    robot:{robot_id}:command:{digest}
    table:{table_id}:state

Note (Result caching skips side effects):
    A hit returns the stored ExecutionResult without executing the command,
    so the robot is not mutated. Replaying a cached MOVE leaves the robot
    where it was. Use state caching alone when commands must always apply.
"""

import hashlib
import json
import logging
import re
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from gridbot.application.registry import CommandConstructor
from gridbot.domain.interfaces import (
    CacheBackendInterface,
    CommandInterface,
    CommandProcessorInterface,
    RobotInterface,
)
from gridbot.domain.models import (
    Direction,
    ExecutionResult,
    Outcome,
    Position,
    ProcessSignal,
    RobotSnapshot,
    Table,
)

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "gridbot"
DEFAULT_TTL = 3600  # seconds

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_cache_id(identifier: str) -> str:
    """
    Check that an id is safe to embed in a glob pattern.

    Raises:
        ValueError: If the id contains anything but letters, digits, ``_.-``
    """
    if not isinstance(identifier, str) or not _ID_PATTERN.match(identifier):
        raise ValueError(
            f"Invalid cache id {identifier!r}: use letters, digits, '_', '.', '-'"
        )
    return identifier


def command_cache_key(command_text: str, state_signature: str) -> str:
    """Deterministic digest of normalized command text and robot state."""
    normalized = " ".join(command_text.split()).upper()
    return hashlib.sha256(f"{normalized}|{state_signature}".encode()).hexdigest()


class RobotCache:
    """
    Namespaced cache service.

    Values are stored as JSON with a TTL. Hits and misses are counted for
    ``stats()``.
    """

    def __init__(
        self,
        backend: CacheBackendInterface,
        namespace: str = DEFAULT_NAMESPACE,
        ttl: int = DEFAULT_TTL,
    ):
        """
        Args:
            backend: Key-value store
            namespace: Prefix isolating this cache from others on the same store
            ttl: Default time-to-live in seconds
        """
        if ttl <= 0:
            raise ValueError(f"Cache TTL must be positive, got {ttl}")
        self._backend = backend
        self._namespace = validate_cache_id(namespace)
        self._ttl = ttl
        self._hits = 0
        self._misses = 0

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def backend(self) -> CacheBackendInterface:
        return self._backend

    # -------------------------------------------------------------------------
    # Generic operations
    # -------------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss, expiry or failure."""
        full_key = self._key(key)
        try:
            raw = self._backend.get(full_key)
        except Exception as e:
            self._degraded("get", full_key, e)
            self._misses += 1
            return None

        if raw is None:
            self._misses += 1
            logger.debug("Cache miss: %s", full_key)
            return None
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding undecodable cache entry %s", full_key)
            self._misses += 1
            return None

        self._hits += 1
        logger.debug("Cache hit: %s", full_key)
        return value

    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a JSON-serializable value. Returns False if it was not stored."""
        full_key = self._key(key)
        try:
            payload = json.dumps(value)
            self._backend.set_with_ttl(full_key, payload, ttl or self._ttl)
        except Exception as e:
            self._degraded("set", full_key, e)
            return False
        return True

    def delete(self, key: str) -> bool:
        full_key = self._key(key)
        try:
            return self._backend.delete(full_key) > 0
        except Exception as e:
            self._degraded("delete", full_key, e)
            return False

    def invalidate(self, pattern: str) -> int:
        """Delete every key in this namespace matching a glob pattern."""
        full_pattern = self._key(pattern)
        try:
            keys = self._backend.keys_matching(full_pattern)
            deleted = self._backend.delete(*keys) if keys else 0
        except Exception as e:
            self._degraded("invalidate", full_pattern, e)
            return 0
        if deleted:
            logger.debug("Invalidated %d keys matching %s", deleted, full_pattern)
        return deleted

    def invalidate_robot(self, robot_id: str) -> int:
        """Delete the state and command results of one robot, and nothing else."""
        return self.invalidate(f"robot:{validate_cache_id(robot_id)}:*")

    def invalidate_commands(self, robot_id: str) -> int:
        return self.invalidate(f"robot:{validate_cache_id(robot_id)}:command:*")

    def invalidate_table(self, table_id: str) -> int:
        return self.invalidate(f"table:{validate_cache_id(table_id)}:*")

    def clear(self) -> int:
        """Delete everything in this namespace."""
        return self.invalidate("*")

    def available(self) -> bool:
        try:
            return bool(self._backend.ping())
        except Exception:
            return False

    def stats(self) -> dict[str, Any]:
        keys_by_type = {"robot": 0, "command": 0, "table": 0}
        stats: dict[str, Any] = {
            "total_keys": 0,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self.hit_rate,
            "keys_by_type": keys_by_type,
            "ttl": self._ttl,
            "namespace": self._namespace,
            "timestamp": _now(),
        }
        try:
            keys = self._backend.keys_matching(self._key("*"))
        except Exception as e:
            self._degraded("stats", self._key("*"), e)
            stats["error"] = str(e)
            return stats

        stats["total_keys"] = len(keys)
        prefix_length = len(self._namespace) + 1
        for key in keys:
            key_type = self._key_type(key[prefix_length:])
            keys_by_type[key_type] = keys_by_type.get(key_type, 0) + 1

        try:
            stats["backend"] = self._backend.info()
        except Exception as e:
            logger.debug("Backend info unavailable: %s", e)
        return stats

    def health_check(self) -> dict[str, Any]:
        try:
            available = bool(self._backend.ping())
            error = None if available else "Cache backend did not answer ping"
        except Exception as e:
            available = False
            error = str(e)

        health: dict[str, Any] = {
            "available": available,
            "status": "healthy" if available else "unhealthy",
            "stats": self.stats(),
            "timestamp": _now(),
        }
        if error:
            health["error"] = error
        return health

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def hit_rate(self) -> float:
        lookups = self._hits + self._misses
        return self._hits / lookups if lookups else 0.0

    # -------------------------------------------------------------------------
    # Typed helpers
    # -------------------------------------------------------------------------

    def cache_robot_state(self, robot_id: str, snapshot: RobotSnapshot) -> bool:
        return self.set(self._robot_key(robot_id, "state"), snapshot.to_dict())

    def robot_state(self, robot_id: str) -> RobotSnapshot | None:
        data = self.get(self._robot_key(robot_id, "state"))
        if data is None:
            return None
        try:
            return RobotSnapshot.from_dict(data)
        except Exception as e:
            logger.warning("Discarding malformed robot state for %s: %s", robot_id, e)
            return None

    def cache_command_result(
        self,
        robot_id: str,
        digest: str,
        result: ExecutionResult,
        state: RobotSnapshot | None = None,
    ) -> bool:
        """Store a result, optionally with the robot state it left behind."""
        payload = result.to_dict()
        if state is not None:
            payload["state"] = state.to_dict()
        return self.set(self._robot_key(robot_id, f"command:{digest}"), payload)

    def command_result(self, robot_id: str, digest: str) -> ExecutionResult | None:
        entry = self.command_entry(robot_id, digest)
        return entry[0] if entry else None

    def command_entry(
        self, robot_id: str, digest: str
    ) -> tuple[ExecutionResult, RobotSnapshot | None] | None:
        """Cached (result, resulting state), or None on miss."""
        data = self.get(self._robot_key(robot_id, f"command:{digest}"))
        if data is None:
            return None
        try:
            state = data.get("state")
            return (
                ExecutionResult.from_dict(data),
                RobotSnapshot.from_dict(state) if state else None,
            )
        except Exception as e:
            logger.warning("Discarding malformed command result %s: %s", digest, e)
            return None

    def cache_table_state(self, table_id: str, table: Table) -> bool:
        key = f"table:{validate_cache_id(table_id)}:state"
        return self.set(key, {"width": table.width, "height": table.height})

    def table_state(self, table_id: str) -> Table | None:
        data = self.get(f"table:{validate_cache_id(table_id)}:state")
        if data is None:
            return None
        try:
            return Table(int(data["width"]), int(data["height"]))
        except Exception as e:
            logger.warning("Discarding malformed table state for %s: %s", table_id, e)
            return None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _key(self, suffix: str) -> str:
        return f"{self._namespace}:{suffix}"

    def _robot_key(self, robot_id: str, suffix: str) -> str:
        return f"robot:{validate_cache_id(robot_id)}:{suffix}"

    @staticmethod
    def _key_type(suffix: str) -> str:
        parts = suffix.split(":")
        if parts[0] == "robot" and len(parts) > 2 and parts[2] == "command":
            return "command"
        if parts[0] in ("robot", "table"):
            return parts[0]
        return "other"

    def _degraded(self, operation: str, key: str, error: Exception) -> None:
        logger.warning("Cache %s failed for %s, continuing without cache: %s", operation, key, error)


class CacheableRobot(RobotInterface):
    """
    Robot decorator that persists a snapshot after every successful mutation.

    Forwards every RobotInterface method to the wrapped robot explicitly.
    """

    def __init__(
        self,
        robot: RobotInterface,
        cache: RobotCache,
        robot_id: str | None = None,
    ):
        """
        Args:
            robot: The robot to wrap
            cache: Cache service to write snapshots to
            robot_id: Cache namespace for this robot (random if None)
        """
        self._robot = robot
        self._cache = cache
        self._robot_id = validate_cache_id(robot_id or f"robot_{uuid.uuid4().hex}")

    @property
    def robot(self) -> RobotInterface:
        return self._robot

    @property
    def robot_id(self) -> str:
        return self._robot_id

    @property
    def cache(self) -> RobotCache:
        return self._cache

    @property
    def table(self) -> Table:
        return self._robot.table

    @property
    def position(self) -> Position | None:
        return self._robot.position

    @property
    def direction(self) -> Direction | None:
        return self._robot.direction

    @property
    def placed(self) -> bool:
        return self._robot.placed

    def place(self, position: Position, direction: Direction) -> Outcome[Any]:
        return self._persist(self._robot.place(position, direction))

    def move(self) -> Outcome[Any]:
        return self._persist(self._robot.move())

    def turn_left(self) -> Outcome[Any]:
        return self._persist(self._robot.turn_left())

    def turn_right(self) -> Outcome[Any]:
        return self._persist(self._robot.turn_right())

    def report(self) -> Outcome[str]:
        return self._robot.report()

    def state_signature(self) -> str:
        return self._robot.state_signature()

    def snapshot(self) -> RobotSnapshot:
        return self._robot.snapshot()

    def restore(self, snapshot: RobotSnapshot) -> Outcome[Any]:
        return self._persist(self._robot.restore(snapshot))

    def load_from_cache(self) -> bool:
        """
        Restore the wrapped robot from its most recent cached snapshot.

        Returns:
            True if a snapshot was found and applied
        """
        snapshot = self._cache.robot_state(self._robot_id)
        if snapshot is None:
            return False
        outcome = self._robot.restore(snapshot)
        if outcome.failed:
            logger.warning(
                "Cached state for %s does not fit the table: %s",
                self._robot_id,
                outcome.message,
            )
            return False
        return True

    def invalidate_cache(self) -> int:
        return self._cache.invalidate_robot(self._robot_id)

    def cache_stats(self) -> dict[str, Any]:
        return self._cache.stats()

    def health_check(self) -> dict[str, Any]:
        return self._cache.health_check()

    def _persist(self, outcome: Outcome[Any]) -> Outcome[Any]:
        if not outcome.failed:
            self._cache.cache_robot_state(self._robot_id, self._robot.snapshot())
        return outcome

    def __str__(self) -> str:
        return str(self._robot)


class CachedCommandProcessor(CommandProcessorInterface):
    """
    Processor decorator that caches command results per robot state.

    The key is ``sha256(command text + "|" + state signature)``, scoped under
    the robot id. Lines that are not commands and terminal commands (EXIT,
    QUIT) bypass the cache.

    With ``restore_state`` each entry also stores the robot state the command
    left behind, and a hit restores it. Replays then match real execution.
    """

    def __init__(
        self,
        processor: CommandProcessorInterface,
        cache: RobotCache,
        robot_id: str | None = None,
        cacheable: Callable[[CommandInterface], bool] | None = None,
        restore_state: bool = False,
    ):
        """
        Args:
            processor: The processor to wrap
            cache: Cache service for results
            robot_id: Cache scope (taken from a CacheableRobot, else random)
            cacheable: Optional predicate restricting which commands are cached
            restore_state: Store and replay the resulting robot state with each result
        """
        self._processor = processor
        self._cache = cache
        if robot_id is None:
            robot_id = getattr(processor.robot, "robot_id", None)
        self._robot_id = validate_cache_id(robot_id or f"robot_{uuid.uuid4().hex}")
        self._cacheable = cacheable
        self._restore_state = restore_state
        self._hits = 0
        self._misses = 0

    @property
    def processor(self) -> CommandProcessorInterface:
        return self._processor

    @property
    def cache(self) -> RobotCache:
        return self._cache

    @property
    def robot_id(self) -> str:
        return self._robot_id

    @property
    def robot(self) -> RobotInterface:
        return self._processor.robot

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def cache_key(self, command: CommandInterface) -> str:
        return command_cache_key(str(command), self.robot.state_signature())

    def parse(self, command_string: str) -> CommandInterface | None:
        return self._processor.parse(command_string)

    def execute(self, command_string: str) -> ExecutionResult | None:
        return self.execute_command(self._processor.parse(command_string))

    def execute_command(
        self, command: CommandInterface | None
    ) -> ExecutionResult | None:
        if command is None:
            return None
        if command.terminal or (self._cacheable and not self._cacheable(command)):
            return self._processor.execute_command(command)

        digest = self.cache_key(command)
        entry = self._cache.command_entry(self._robot_id, digest)
        if entry is not None and self._replay_state(command, entry[1]):
            self._hits += 1
            logger.debug("Replaying cached result for %s", command)
            return entry[0]

        self._misses += 1
        result = self._processor.execute_command(command)
        if result is not None:
            state = self.robot.snapshot() if self._restore_state else None
            self._cache.cache_command_result(self._robot_id, digest, result, state)
        return result

    def _replay_state(self, command: CommandInterface, state: RobotSnapshot | None) -> bool:
        """Apply a cached resulting state. False means the entry cannot be replayed."""
        if not self._restore_state:
            return True
        if state is None:
            return False
        outcome = self.robot.restore(state)
        if outcome.failed:
            logger.debug("Cached state for %s does not fit: %s", command, outcome.message)
            return False
        return True

    def emit(self, result: ExecutionResult) -> None:
        self._processor.emit(result)

    def process(self, command_string: str) -> ProcessSignal:
        try:
            command = self._processor.parse(command_string)
            result = self.execute_command(command)
            if result is None:
                return ProcessSignal.CONTINUE
            self.emit(result)
        except Exception:
            logger.exception("Unexpected failure processing %r", command_string)
            return ProcessSignal.CONTINUE

        if command is not None and command.terminal:
            return ProcessSignal.TERMINATE
        return ProcessSignal.CONTINUE

    def register_command(self, name: str, constructor: CommandConstructor) -> None:
        self._processor.register_command(name, constructor)
        # Cached results may come from the replaced constructor
        self.invalidate()

    def available_commands(self) -> list[str]:
        return self._processor.available_commands()

    def invalidate(self) -> int:
        """Drop this robot's cached command results."""
        return self._cache.invalidate_commands(self._robot_id)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
