"""Structured command execution.

The command and its arguments are passed separately and no shell is involved,
which keeps requests easy to inspect. This is not a sandbox: the command runs
with the privileges of the hosting process.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from pydantic import Field

from gamecode_tools.errors import raise_invalid_params
from gamecode_tools.tooling import Tool, ToolOutput, ToolParameters

logger = logging.getLogger(__name__)

SHELL_METACHARACTERS = frozenset(";&|()<>$`\\\"'")


class ShellParams(ToolParameters):
    """Parameters for the shell tool.

    ``timeout_ms`` of 0 disables the timeout.
    """

    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    cwd: str | None = None
    capture_stderr: bool = False
    timeout_ms: int = Field(default=0, ge=0)


class ShellOutput(ToolOutput):
    command: str
    args: list[str]
    status: int
    success: bool
    stdout: str
    stderr: str | None = None
    timed_out: bool


def validate_command(command: str) -> None:
    """Reject commands carrying whitespace or shell metacharacters."""
    if not command:
        raise_invalid_params("Command must not be empty")
    if any(char.isspace() or char in SHELL_METACHARACTERS for char in command):
        raise_invalid_params(
            f"Command '{command}' contains whitespace or shell metacharacters. "
            "Use the 'args' parameter for arguments instead."
        )


class Shell(Tool[ShellParams, ShellOutput]):
    """Execute a command with explicit arguments."""

    name = "shell"
    description = "Execute a shell command"
    parameters_model = ShellParams

    async def execute(self, params: ShellParams) -> ShellOutput:
        validate_command(params.command)
        if params.cwd is not None and not Path(params.cwd).exists():
            raise_invalid_params(f"Working directory does not exist: {params.cwd}")

        env = {**os.environ, **params.env} if params.env else None
        logger.debug("Running %s %s", params.command, params.args)
        process = await asyncio.create_subprocess_exec(
            params.command,
            *params.args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=(
                asyncio.subprocess.PIPE
                if params.capture_stderr
                else asyncio.subprocess.DEVNULL
            ),
            cwd=params.cwd,
            env=env,
        )

        timeout = params.timeout_ms / 1000 if params.timeout_ms else None
        timed_out = False
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError:
            timed_out = True
            logger.info(
                "Command %s timed out after %d ms", params.command, params.timeout_ms
            )
            process.kill()
            stdout, stderr = await process.communicate()

        # killed by a signal
        status = process.returncode if process.returncode is not None else -1
        if status < 0:
            status = -1
        return ShellOutput(
            command=params.command,
            args=params.args,
            status=status,
            success=status == 0,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=(
                stderr.decode("utf-8", errors="replace")
                if params.capture_stderr and stderr is not None
                else None
            ),
            timed_out=timed_out,
        )
