"""
Command plugin discovery via Python entry points (gridbot.commands group).

External packages can contribute commands in their pyproject.toml:

    [project.entry-points."gridbot.commands"]
    JUMP = "mypackage.commands:JumpCommand"

The entry point name is the command name; the object must be callable and
return a CommandInterface.
"""

import warnings
from importlib.metadata import entry_points

from gridbot.application.registry import CommandFactory

ENTRY_POINT_GROUP = "gridbot.commands"


def discover_commands(factory: CommandFactory, group: str = ENTRY_POINT_GROUP) -> list[str]:
    """
    Register every command published under the entry point group.

    Entry points that fail to load are skipped with a warning.

    Returns:
        Names of the commands that were registered
    """
    registered = []
    for ep in entry_points(group=group):
        try:
            constructor = ep.load()
            factory.register_command(ep.name, constructor)
        except Exception as e:
            warnings.warn(
                f"Failed to load command '{ep.name}' from entry point: {e}",
                stacklevel=2,
            )
            continue
        registered.append(ep.name.strip().upper())
    return registered
