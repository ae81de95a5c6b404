"""Tests for output sinks."""

import io

from gridbot.infrastructure.sinks import (
    CallbackOutputSink,
    CollectingOutputSink,
    StreamOutputSink,
)


def test_stream_sink_writes_lines() -> None:
    stream = io.StringIO()
    sink = StreamOutputSink(stream)

    sink.write("0,0,NORTH")
    sink.write("1,0,EAST")

    assert stream.getvalue() == "0,0,NORTH\n1,0,EAST\n"


def test_stream_sink_defaults_to_stdout(capsys) -> None:
    StreamOutputSink().write("hello")

    assert capsys.readouterr().out == "hello\n"


def test_collecting_sink() -> None:
    sink = CollectingOutputSink()

    sink.write("a")
    sink.write("b")
    assert sink.messages == ["a", "b"]

    sink.clear()
    assert sink.messages == []


def test_callback_sink() -> None:
    received: list[str] = []

    CallbackOutputSink(received.append).write("a")

    assert received == ["a"]
