"""
Output formatters.

Each formatter renders robot reports, errors, successes and the goodbye line
for one presentation. Returning None means "print nothing".
"""

import csv
import io
import json
from typing import Any
from xml.sax.saxutils import escape

from gridbot.domain.commands import GOODBYE_MESSAGE
from gridbot.domain.exceptions import NotPlaced
from gridbot.domain.interfaces import OutputFormatterInterface, RobotInterface

FAREWELL = "Thank you for using Robot Challenge Simulator!"


def robot_data(robot: RobotInterface) -> dict[str, Any]:
    """
    Structured view of a placed robot.

    Raises:
        NotPlaced: If the robot has not been placed
    """
    position, direction = robot.position, robot.direction
    if position is None or direction is None:
        raise NotPlaced("Robot must be placed before reporting")
    return {
        "position": {"x": position.x, "y": position.y},
        "direction": direction.value,
        "formatted": f"{position},{direction}",
    }


class TextOutputFormatter(OutputFormatterInterface):
    """Plain text: reports only. Errors and successes are silent."""

    def format_report(self, robot: RobotInterface) -> str | None:
        return robot.report().unwrap()

    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        return None

    def format_success(self, message: str | None = None) -> str | None:
        return None

    def format_goodbye(self) -> str | None:
        return GOODBYE_MESSAGE


class JsonOutputFormatter(OutputFormatterInterface):
    def format_report(self, robot: RobotInterface) -> str | None:
        return json.dumps(
            {"status": "success", "type": "report", "data": robot_data(robot)}
        )

    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        return json.dumps({"status": "error", "type": error_kind, "message": message})

    def format_success(self, message: str | None = None) -> str | None:
        return json.dumps({"status": "success", "message": message})

    def format_goodbye(self) -> str | None:
        return json.dumps({"status": "info", "type": "goodbye", "message": FAREWELL})


class XmlOutputFormatter(OutputFormatterInterface):
    """XML documents. Text content is escaped."""

    _DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

    def format_report(self, robot: RobotInterface) -> str | None:
        data = robot_data(robot)
        return "\n".join(
            [
                self._DECLARATION,
                "<robot_report>",
                "  <status>success</status>",
                "  <position>",
                f"    <x>{data['position']['x']}</x>",
                f"    <y>{data['position']['y']}</y>",
                "  </position>",
                f"  <direction>{data['direction']}</direction>",
                f"  <formatted>{escape(data['formatted'])}</formatted>",
                "</robot_report>",
            ]
        )

    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        return "\n".join(
            [
                self._DECLARATION,
                "<robot_error>",
                "  <status>error</status>",
                f"  <type>{escape(error_kind)}</type>",
                f"  <message>{escape(message)}</message>",
                "</robot_error>",
            ]
        )

    def format_success(self, message: str | None = None) -> str | None:
        return "\n".join(
            [
                self._DECLARATION,
                "<robot_response>",
                "  <status>success</status>",
                f"  <message>{escape(message or '')}</message>",
                "</robot_response>",
            ]
        )

    def format_goodbye(self) -> str | None:
        return "\n".join(
            [
                self._DECLARATION,
                "<robot_goodbye>",
                f"  <message>{FAREWELL}</message>",
                "</robot_goodbye>",
            ]
        )


class CsvOutputFormatter(OutputFormatterInterface):
    """Header row plus one data row."""

    def format_report(self, robot: RobotInterface) -> str | None:
        data = robot_data(robot)
        position = data["position"]
        return self._rows(
            ["x", "y", "direction", "formatted"],
            [position["x"], position["y"], data["direction"], data["formatted"]],
        )

    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        return self._rows(["status", "type", "message"], ["error", error_kind, message])

    def format_success(self, message: str | None = None) -> str | None:
        return self._rows(["status", "message"], ["success", message or ""])

    def format_goodbye(self) -> str | None:
        return self._rows(["type", "message"], ["goodbye", FAREWELL])

    @staticmethod
    def _rows(*rows: list[Any]) -> str:
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerows(rows)
        return buffer.getvalue().rstrip("\n")


class QuietOutputFormatter(OutputFormatterInterface):
    """Prints nothing at all."""

    def format_report(self, robot: RobotInterface) -> str | None:
        return None

    def format_error(self, message: str, error_kind: str = "general_error") -> str | None:
        return None

    def format_success(self, message: str | None = None) -> str | None:
        return None

    def format_goodbye(self) -> str | None:
        return None


FORMATTERS: dict[str, type[OutputFormatterInterface]] = {
    "text": TextOutputFormatter,
    "json": JsonOutputFormatter,
    "xml": XmlOutputFormatter,
    "csv": CsvOutputFormatter,
    "quiet": QuietOutputFormatter,
    "none": QuietOutputFormatter,
}


def create_formatter(name: str | None = None) -> OutputFormatterInterface:
    """Build a formatter by name. Unknown or missing names give plain text."""
    formatter_class = FORMATTERS.get((name or "text").strip().lower(), TextOutputFormatter)
    return formatter_class()
