"""Output sinks: where rendered messages go."""

import sys
from collections.abc import Callable
from typing import TextIO

from gridbot.domain.interfaces import OutputSinkInterface


class StreamOutputSink(OutputSinkInterface):
    """Write each message as a line to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, message: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"{message}\n")
        stream.flush()


class CollectingOutputSink(OutputSinkInterface):
    """Keep messages in memory."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def write(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


class CallbackOutputSink(OutputSinkInterface):
    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def write(self, message: str) -> None:
        self._callback(message)
