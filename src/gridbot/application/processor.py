"""
CommandProcessor: the top-level command pipeline.

Composes parser -> dispatcher -> output sink. ``execute`` is the cacheable
step (line in, result out); ``process`` adds rendering and output and never
raises.
"""

import logging
from collections.abc import Iterable

from gridbot.application.dispatcher import CommandDispatcher
from gridbot.application.parser import CommandParser
from gridbot.application.registry import CommandConstructor
from gridbot.domain.interfaces import (
    CommandInterface,
    CommandProcessorInterface,
    OutputSinkInterface,
    RobotInterface,
)
from gridbot.domain.models import ExecutionResult, ProcessSignal

logger = logging.getLogger(__name__)


class CommandProcessor(CommandProcessorInterface):
    """
    Facade over parsing, dispatching and output.

    Example:
        processor = CommandProcessor(robot, parser, dispatcher, sink)
        processor.process("PLACE 0,0,NORTH")
        processor.process("REPORT")  # sink receives "0,0,NORTH"
    """

    def __init__(
        self,
        robot: RobotInterface,
        parser: CommandParser,
        dispatcher: CommandDispatcher,
        sink: OutputSinkInterface,
    ):
        """
        Args:
            robot: The robot being driven (must be the dispatcher's robot)
            parser: Line -> command parser
            dispatcher: Executes commands and renders results
            sink: Receives rendered messages
        """
        self._robot = robot
        self._parser = parser
        self._dispatcher = dispatcher
        self._sink = sink

    @property
    def robot(self) -> RobotInterface:
        return self._robot

    @property
    def parser(self) -> CommandParser:
        return self._parser

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def parse(self, command_string: str) -> CommandInterface | None:
        return self._parser.parse(command_string)

    def execute(self, command_string: str) -> ExecutionResult | None:
        return self.execute_command(self._parser.parse(command_string))

    def execute_command(
        self, command: CommandInterface | None
    ) -> ExecutionResult | None:
        result = self._dispatcher.dispatch(command)
        if isinstance(result, ProcessSignal):
            return None
        return result

    def emit(self, result: ExecutionResult) -> None:
        message = self._dispatcher.render(result)
        if message is not None:
            self._sink.write(message)

    def process(self, command_string: str) -> ProcessSignal:
        try:
            command = self._parser.parse(command_string)
            result = self.execute_command(command)
            if result is None:
                return ProcessSignal.CONTINUE
            self.emit(result)
        except Exception:
            logger.exception("Unexpected failure processing %r", command_string)
            return ProcessSignal.CONTINUE

        if self._dispatcher.is_terminal(command):
            return ProcessSignal.TERMINATE
        return ProcessSignal.CONTINUE

    def register_command(self, name: str, constructor: CommandConstructor) -> None:
        self._parser.factory.register_command(name, constructor)

    def available_commands(self) -> list[str]:
        return self._parser.available_commands()


def process_lines(
    processor: CommandProcessorInterface,
    lines: Iterable[str],
    max_commands: int | None = None,
) -> tuple[ProcessSignal, int]:
    """
    Feed lines to a processor until input ends, EXIT/QUIT, or the limit.

    Returns:
        Tuple of (last signal, number of lines processed)
    """
    signal = ProcessSignal.CONTINUE
    count = 0
    for line in lines:
        if max_commands is not None and count >= max_commands:
            logger.warning("Stopped after %d commands (limit reached)", count)
            break
        signal = processor.process(line.rstrip("\r\n"))
        count += 1
        if signal is ProcessSignal.TERMINATE:
            break
    return signal, count
