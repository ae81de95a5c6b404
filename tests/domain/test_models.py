"""Tests for domain value objects."""

import pytest

from gridbot.domain.exceptions import (
    ErrorKind,
    InvalidDirection,
    InvalidPosition,
    NotPlaced,
    RobotError,
)
from gridbot.domain.models import (
    Direction,
    ExecutionResult,
    Outcome,
    Position,
    ResultStatus,
    RobotSnapshot,
    Table,
)


class TestPosition:
    """Tests for Position."""

    def test_move_returns_new_position(self) -> None:
        """move() offsets without mutating the original."""
        origin = Position(1, 1)

        moved = origin.move(0, 1)

        assert moved == Position(1, 2)
        assert origin == Position(1, 1)

    def test_positions_compare_by_value(self) -> None:
        assert Position(2, 3) == Position(2, 3)
        assert hash(Position(2, 3)) == hash(Position(2, 3))

    def test_str_is_comma_separated(self) -> None:
        assert str(Position(3, 4)) == "3,4"

    @pytest.mark.parametrize("x, y", [("1", 2), (1, 2.5), (None, 0), (True, 0)])
    def test_non_integer_coordinates_rejected(self, x, y) -> None:
        """Only real ints are coordinates."""
        with pytest.raises(InvalidPosition):
            Position(x, y)

    def test_is_immutable(self) -> None:
        position = Position(0, 0)

        with pytest.raises(AttributeError):
            position.x = 1  # type: ignore[misc]


class TestDirection:
    """Tests for Direction rotation and lookup."""

    def test_turn_right_cycles_clockwise(self) -> None:
        assert Direction.NORTH.turn_right() is Direction.EAST
        assert Direction.EAST.turn_right() is Direction.SOUTH
        assert Direction.SOUTH.turn_right() is Direction.WEST
        assert Direction.WEST.turn_right() is Direction.NORTH

    def test_turn_left_cycles_counter_clockwise(self) -> None:
        assert Direction.NORTH.turn_left() is Direction.WEST
        assert Direction.WEST.turn_left() is Direction.SOUTH
        assert Direction.SOUTH.turn_left() is Direction.EAST
        assert Direction.EAST.turn_left() is Direction.NORTH

    @pytest.mark.parametrize("direction", list(Direction))
    def test_four_turns_return_to_start(self, direction: Direction) -> None:
        """Four rotations either way are the identity."""
        left = direction
        right = direction
        for _ in range(4):
            left = left.turn_left()
            right = right.turn_right()

        assert left is direction
        assert right is direction

    @pytest.mark.parametrize("direction", list(Direction))
    def test_left_then_right_is_identity(self, direction: Direction) -> None:
        assert direction.turn_left().turn_right() is direction

    def test_deltas(self) -> None:
        assert Direction.NORTH.delta == (0, 1)
        assert Direction.EAST.delta == (1, 0)
        assert Direction.SOUTH.delta == (0, -1)
        assert Direction.WEST.delta == (-1, 0)

    def test_from_name_ignores_case_and_whitespace(self) -> None:
        assert Direction.from_name(" north ") is Direction.NORTH
        assert Direction.from_name("West") is Direction.WEST

    def test_from_name_unknown_raises(self) -> None:
        with pytest.raises(InvalidDirection) as exc_info:
            Direction.from_name("UP")

        assert exc_info.value.kind is ErrorKind.INVALID_DIRECTION
        assert "UP" in exc_info.value.message

    def test_names_and_str(self) -> None:
        assert Direction.names() == ["NORTH", "EAST", "SOUTH", "WEST"]
        assert str(Direction.SOUTH) == "SOUTH"


class TestTable:
    """Tests for Table boundary checks."""

    def test_default_is_five_by_five(self) -> None:
        table = Table()

        assert (table.width, table.height) == (5, 5)
        assert str(table) == "5x5 table"

    @pytest.mark.parametrize(
        "position, valid",
        [
            (Position(0, 0), True),
            (Position(4, 4), True),
            (Position(5, 0), False),
            (Position(0, 5), False),
            (Position(-1, 0), False),
            (Position(0, -1), False),
        ],
    )
    def test_is_valid(self, table: Table, position: Position, valid: bool) -> None:
        assert table.is_valid(position) is valid

    def test_non_position_is_invalid(self, table: Table) -> None:
        assert table.is_valid((0, 0)) is False
        assert table.is_valid(None) is False

    def test_zero_sized_table_has_no_valid_cells(self) -> None:
        table = Table(0, 0)

        assert table.positions() == []
        assert table.is_valid(Position(0, 0)) is False

    def test_negative_dimensions_rejected(self) -> None:
        with pytest.raises(ValueError):
            Table(-1, 5)

    def test_positions_enumerates_every_cell(self) -> None:
        positions = Table(2, 3).positions()

        assert len(positions) == 6
        assert positions[0] == Position(0, 0)
        assert positions[-1] == Position(1, 2)


class TestOutcome:
    """Tests for the Outcome result type."""

    def test_ok_unwraps_value(self) -> None:
        outcome = Outcome.ok("0,0,NORTH")

        assert outcome.failed is False
        assert outcome.unwrap() == "0,0,NORTH"

    def test_fail_unwrap_raises_matching_error(self) -> None:
        outcome = Outcome.fail(ErrorKind.NOT_PLACED, "Robot must be placed before moving")

        assert outcome.failed is True
        with pytest.raises(NotPlaced, match="before moving"):
            outcome.unwrap()

    def test_fail_with_other_kind_raises_robot_error(self) -> None:
        outcome = Outcome.fail(ErrorKind.INVALID_PLACEMENT, "bad")

        with pytest.raises(RobotError) as exc_info:
            outcome.unwrap()

        assert exc_info.value.kind is ErrorKind.INVALID_PLACEMENT


class TestExecutionResult:
    """Tests for ExecutionResult constructors and serialization."""

    def test_constructors_set_status(self) -> None:
        assert ExecutionResult.success().status is ResultStatus.SUCCESS
        assert ExecutionResult.output("1,1,EAST").message == "1,1,EAST"

        error = ExecutionResult.error("nope", ErrorKind.NOT_PLACED)
        assert error.is_error
        assert error.error_kind is ErrorKind.NOT_PLACED

    def test_error_defaults_to_execution_error(self) -> None:
        assert ExecutionResult.error("boom").error_kind is ErrorKind.EXECUTION_ERROR

    def test_to_dict_is_json_friendly(self) -> None:
        data = ExecutionResult.error("nope", ErrorKind.INVALID_POSITION).to_dict()

        assert data == {
            "status": "error",
            "message": "nope",
            "data": None,
            "error_kind": "invalid_position",
        }

    def test_from_dict_restores_equal_result(self) -> None:
        result = ExecutionResult.output("2,3,WEST")

        assert ExecutionResult.from_dict(result.to_dict()) == result


class TestRobotSnapshot:
    """Tests for RobotSnapshot serialization."""

    def test_placed_snapshot_round_trips(self) -> None:
        snapshot = RobotSnapshot(
            position=Position(1, 2),
            direction=Direction.EAST,
            table_width=5,
            table_height=5,
            timestamp="2025-01-01T00:00:00+00:00",
        )

        data = snapshot.to_dict()

        assert data["position"] == {"x": 1, "y": 2}
        assert data["direction"] == "EAST"
        assert data["placed"] is True
        assert data["table"] == {"width": 5, "height": 5}
        assert RobotSnapshot.from_dict(data) == snapshot

    def test_unplaced_snapshot(self) -> None:
        snapshot = RobotSnapshot(None, None, 5, 5, "2025-01-01T00:00:00+00:00")

        data = snapshot.to_dict()

        assert data["position"] is None
        assert data["placed"] is False
        assert RobotSnapshot.from_dict(data).placed is False
