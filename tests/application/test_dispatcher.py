"""Tests for CommandDispatcher."""

from dataclasses import dataclass

from gridbot.application.dispatcher import CommandDispatcher
from gridbot.domain.commands import (
    GOODBYE_MESSAGE,
    ExitCommand,
    MoveCommand,
    PlaceCommand,
    ReportCommand,
)
from gridbot.domain.exceptions import ErrorKind, NotPlaced
from gridbot.domain.interfaces import CommandInterface, RobotInterface
from gridbot.domain.models import ExecutionResult, ProcessSignal, ResultStatus
from gridbot.domain.robot import Robot
from gridbot.infrastructure.formatters import JsonOutputFormatter


@dataclass(frozen=True)
class ExplodingCommand(CommandInterface):
    def execute(self, robot: RobotInterface) -> ExecutionResult:
        raise RuntimeError("kaboom")


@dataclass(frozen=True)
class StrictMoveCommand(CommandInterface):
    """Raises instead of returning an error result."""

    def execute(self, robot: RobotInterface) -> ExecutionResult:
        robot.move().unwrap()
        return ExecutionResult.success()


@dataclass(frozen=True)
class SloppyCommand(CommandInterface):
    def execute(self, robot: RobotInterface) -> ExecutionResult:
        return "done"  # type: ignore[return-value]


class TestDispatch:
    """Tests for dispatch()."""

    def test_none_continues(self, dispatcher: CommandDispatcher) -> None:
        assert dispatcher.dispatch(None) is ProcessSignal.CONTINUE

    def test_successful_command(self, dispatcher: CommandDispatcher, robot: Robot) -> None:
        result = dispatcher.dispatch(PlaceCommand(2, 2, "WEST"))

        assert result == ExecutionResult.success()
        assert robot.state_signature() == "2,2,WEST"

    def test_invalid_command_is_rejected_before_execution(
        self, dispatcher: CommandDispatcher, robot: Robot
    ) -> None:
        result = dispatcher.dispatch(PlaceCommand(-1, 0, "NORTH"))

        assert isinstance(result, ExecutionResult)
        assert result.error_kind is ErrorKind.INVALID_COMMAND
        assert robot.placed is False

    def test_domain_error_result(self, dispatcher: CommandDispatcher) -> None:
        result = dispatcher.dispatch(MoveCommand())

        assert isinstance(result, ExecutionResult)
        assert result.error_kind is ErrorKind.NOT_PLACED

    def test_raised_robot_error_keeps_its_kind(self, dispatcher: CommandDispatcher) -> None:
        result = dispatcher.dispatch(StrictMoveCommand())

        assert isinstance(result, ExecutionResult)
        assert result.error_kind is NotPlaced.kind

    def test_unexpected_exception_becomes_execution_error(
        self, dispatcher: CommandDispatcher
    ) -> None:
        result = dispatcher.dispatch(ExplodingCommand())

        assert isinstance(result, ExecutionResult)
        assert result.error_kind is ErrorKind.EXECUTION_ERROR
        assert result.message == "kaboom"

    def test_non_result_return_is_an_error(self, dispatcher: CommandDispatcher) -> None:
        result = dispatcher.dispatch(SloppyCommand())

        assert isinstance(result, ExecutionResult)
        assert result.is_error

    def test_dispatch_many(self, dispatcher: CommandDispatcher) -> None:
        results = dispatcher.dispatch_many([PlaceCommand(0, 0, "NORTH"), None, ReportCommand()])

        assert results == [
            ExecutionResult.success(),
            ProcessSignal.CONTINUE,
            ExecutionResult.output("0,0,NORTH"),
        ]

    def test_is_terminal(self, dispatcher: CommandDispatcher) -> None:
        assert dispatcher.is_terminal(ExitCommand())
        assert not dispatcher.is_terminal(MoveCommand())
        assert not dispatcher.is_terminal(None)


class TestRender:
    """Tests for render() with the text formatter."""

    def test_report_renders_robot_state(
        self, dispatcher: CommandDispatcher, placed_robot: Robot
    ) -> None:
        assert dispatcher.render(ExecutionResult.output("0,0,NORTH")) == "0,0,NORTH"

    def test_non_report_output_passes_through(self, dispatcher: CommandDispatcher) -> None:
        assert dispatcher.render(ExecutionResult.output("hello")) == "hello"

    def test_goodbye_goes_through_formatter(self, dispatcher: CommandDispatcher) -> None:
        assert dispatcher.render(ExecutionResult.output(GOODBYE_MESSAGE)) == GOODBYE_MESSAGE

        dispatcher.formatter = JsonOutputFormatter()
        rendered = dispatcher.render(ExecutionResult.output(GOODBYE_MESSAGE))

        assert '"type": "goodbye"' in rendered

    def test_errors_and_successes_are_silent(self, dispatcher: CommandDispatcher) -> None:
        assert dispatcher.render(ExecutionResult.error("nope", ErrorKind.NOT_PLACED)) is None
        assert dispatcher.render(ExecutionResult.success()) is None

    def test_formatter_can_be_swapped(
        self, dispatcher: CommandDispatcher, placed_robot: Robot
    ) -> None:
        dispatcher.formatter = JsonOutputFormatter()

        rendered = dispatcher.render(ExecutionResult.error("nope", ErrorKind.NOT_PLACED))

        assert rendered == '{"status": "error", "type": "robot_not_placed", "message": "nope"}'
        assert '"type": "report"' in dispatcher.render(ExecutionResult.output("0,0,NORTH"))

    def test_render_result_status_routing(self, dispatcher: CommandDispatcher) -> None:
        dispatcher.formatter = JsonOutputFormatter()

        rendered = dispatcher.render(ExecutionResult(status=ResultStatus.SUCCESS, message="ok"))

        assert rendered == '{"status": "success", "message": "ok"}'
