"""
CommandDispatcher: executes commands against the robot.

Separates execution from parsing. Nothing raised by a command escapes
``dispatch``; failures become ERROR results. ``render`` turns results into
text for the output sink via a pluggable formatter.
"""

import logging
import re
from collections.abc import Iterable

from gridbot.domain.commands import GOODBYE_MESSAGE
from gridbot.domain.exceptions import ErrorKind, RobotError
from gridbot.domain.interfaces import (
    CommandInterface,
    OutputFormatterInterface,
    RobotInterface,
)
from gridbot.domain.models import ExecutionResult, ProcessSignal, ResultStatus

logger = logging.getLogger(__name__)

REPORT_PATTERN = re.compile(r"^\d+,\d+,(NORTH|SOUTH|EAST|WEST)$")


class CommandDispatcher:
    """Runs commands on one robot and formats their results."""

    def __init__(self, robot: RobotInterface, formatter: OutputFormatterInterface):
        """
        Args:
            robot: The robot commands act on
            formatter: Presentation for reports, errors and successes
        """
        self._robot = robot
        self._formatter = formatter

    @property
    def robot(self) -> RobotInterface:
        return self._robot

    @property
    def formatter(self) -> OutputFormatterInterface:
        return self._formatter

    @formatter.setter
    def formatter(self, formatter: OutputFormatterInterface) -> None:
        self._formatter = formatter

    def dispatch(
        self, command: CommandInterface | None
    ) -> ExecutionResult | ProcessSignal:
        """
        Execute one command.

        Args:
            command: Parsed command, or None for a line that was not a command

        Returns:
            ProcessSignal.CONTINUE for None, otherwise the ExecutionResult
        """
        if command is None:
            return ProcessSignal.CONTINUE

        logger.debug("Dispatching %s", command)
        if not command.is_valid():
            return ExecutionResult.error(
                f"Invalid command: {command}", ErrorKind.INVALID_COMMAND
            )

        try:
            result = command.execute(self._robot)
        except RobotError as e:
            logger.debug("Command %s rejected: %s", command, e)
            return ExecutionResult.error(e.message, e.kind)
        except Exception as e:
            logger.debug("Command %s failed: %s", command, e, exc_info=True)
            return ExecutionResult.error(str(e), ErrorKind.EXECUTION_ERROR)

        if not isinstance(result, ExecutionResult):
            return ExecutionResult.error(
                f"{type(command).__name__} returned {type(result).__name__}",
                ErrorKind.EXECUTION_ERROR,
            )
        if result.is_error:
            logger.debug("Command %s rejected: %s", command, result.message)
        return result

    def dispatch_many(
        self, commands: Iterable[CommandInterface | None]
    ) -> list[ExecutionResult | ProcessSignal]:
        return [self.dispatch(command) for command in commands]

    def is_terminal(self, command: CommandInterface | None) -> bool:
        return command is not None and command.terminal

    def render(self, result: ExecutionResult) -> str | None:
        """
        Format a result for output.

        Report-shaped OUTPUT messages are formatted from the robot and the
        goodbye line by the formatter. Other OUTPUT messages pass through
        unchanged.
        """
        if result.status is ResultStatus.OUTPUT:
            message = result.message
            if isinstance(message, RobotInterface):
                return self._formatter.format_report(message)
            if message == GOODBYE_MESSAGE:
                return self._formatter.format_goodbye()
            if message is not None and self._is_report(message):
                return self._formatter.format_report(self._robot)
            return message
        if result.status is ResultStatus.ERROR:
            kind = result.error_kind or ErrorKind.EXECUTION_ERROR
            return self._formatter.format_error(result.message or "", kind.value)
        return self._formatter.format_success(result.message)

    @staticmethod
    def _is_report(message: object) -> bool:
        return isinstance(message, str) and REPORT_PATTERN.match(message) is not None
