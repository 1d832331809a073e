"""Runner for the external flashing tool.

This module handles:
- Composing the flashing tool command from a flash request
- Executing it with the resolved environment
- Passing the tool's exit status through

The tool owns the serial port and the terminal for the duration of the run;
its output is neither captured nor parsed.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nodeflash.config import Settings
    from nodeflash.types import FlashRequest, ResolvedEnvironment

logger = logging.getLogger(__name__)


class FlashExecutionError(Exception):
    """Raised when the flashing tool cannot be started."""

    def __init__(self, message: str, code: str = "flash_error") -> None:
        super().__init__(message)
        self.code = code


@dataclass
class FlashResult:
    """Result of a flashing tool run.

    Attributes:
        exit_code: Raw return code of the tool process.
        command: The command that was executed.
    """

    exit_code: int
    command: str


def compose_flash_command(request: FlashRequest, settings: Settings) -> list[str]:
    """Compose the flashing tool command for a request.

    Args:
        request: Flash request; empty fields are passed through unchanged.
        settings: Settings providing tool, speed and partition table.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    cmd = shlex.split(settings.flash_tool)
    cmd.extend(["--features", request.platform])
    cmd.extend(["--speed", str(settings.flash_speed)])
    cmd.extend(["--monitor", request.serial_port])
    cmd.extend(["--partition-table", str(settings.partition_table)])
    return cmd


def build_child_env(resolved: ResolvedEnvironment) -> dict[str, str]:
    """Return the current environment with the resolved values added."""
    env = dict(os.environ)
    env.update(resolved.as_env())
    return env


def run_flash(
    request: FlashRequest,
    resolved: ResolvedEnvironment,
    settings: Settings,
) -> FlashResult:
    """Run the flashing tool once and wait for it.

    Args:
        request: Flash request from the command line.
        resolved: Environment values exported to the tool.
        settings: Tool settings.

    Returns:
        FlashResult with the tool's exit status.

    Raises:
        FlashExecutionError: If the tool cannot be started.
    """
    cmd = compose_flash_command(request, settings)
    cmd_str = shlex.join(cmd)
    logger.info("Executing flash: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            env=build_child_env(resolved),
            check=False,
        )
    except OSError as e:
        error_message = f"Failed to execute {cmd[0]}: {e}"
        logger.error(error_message)
        raise FlashExecutionError(error_message, code="execution_error") from e

    exit_code = result.returncode
    if exit_code != 0:
        logger.warning("Flash tool exited with code %d", exit_code)

    return FlashResult(exit_code=exit_code, command=cmd_str)


def exit_status(exit_code: int) -> int:
    """Map a child return code to a process exit status.

    A negative return code means the child was killed by that signal; it is
    reported the way a shell does, as 128 plus the signal number.
    """
    if exit_code < 0:
        return 128 - exit_code
    return exit_code


__all__ = [
    "FlashExecutionError",
    "FlashResult",
    "build_child_env",
    "compose_flash_command",
    "exit_status",
    "run_flash",
]
