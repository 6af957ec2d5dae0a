"""Low-level process spawning.

A ``Sink`` describes where a child stream goes. It is turned into a concrete
``subprocess`` handle only when the process is spawned, so callers never hold
OS resources between calls.
"""

from __future__ import annotations

import enum
import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from os import PathLike

from shellexec.core.config import ShellSettings


class Sink(enum.Enum):
    """Destination of a child output stream."""

    DISCARD = "discard"
    INHERIT = "inherit"
    CAPTURE = "capture"

    def to_handle(self) -> int | None:
        if self is Sink.DISCARD:
            return subprocess.DEVNULL
        if self is Sink.CAPTURE:
            return subprocess.PIPE
        return None


@dataclass(frozen=True)
class CommandResult:
    """Result of running a command.

    ``stdout`` and ``stderr`` hold raw bytes only for captured streams and are
    ``None`` otherwise.
    """

    exit_code: int
    stdout: bytes | None
    stderr: bytes | None


class CommandRunner:
    """Runs one OS command to completion with the requested sinks."""

    _logger = logging.getLogger(__name__)

    def __init__(self, *, settings: ShellSettings | None = None) -> None:
        self._settings = settings or ShellSettings()

    @property
    def settings(self) -> ShellSettings:
        """Returns the settings this runner was built with."""

        return self._settings

    def run(
        self,
        *,
        args: Sequence[str],
        stdout: Sink = Sink.DISCARD,
        stderr: Sink = Sink.CAPTURE,
        cwd: str | PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Spawns ``args`` and blocks until the child exits.

        Args:
            args: Executable path followed by its arguments (no shell).
            stdout: Sink for the child's standard output.
            stderr: Sink for the child's standard error.
            cwd: Working directory. Inherited when None.
            env: Complete environment for the child. Replaces the inherited
                environment instead of being merged into it.

        Returns:
            Exit code plus the bytes of every captured stream.

        Raises:
            OSError: If the process cannot be started.
        """

        self._logger.debug(
            "command started: path=%s argc=%s cwd=%s",
            args[0],
            len(args) - 1,
            cwd,
        )
        with subprocess.Popen(
            list(args),
            stdin=None,
            stdout=stdout.to_handle(),
            stderr=stderr.to_handle(),
            cwd=cwd,
            env=dict(env) if env is not None else None,
        ) as process:
            # communicate() drains every pipe while waiting, so a chatty child
            # cannot block on a full stderr buffer.
            out, err = process.communicate()
        # A child killed by a signal reports the signal number as its status.
        exit_code = abs(int(process.returncode))
        self._logger.debug(
            "command finished: path=%s exit_code=%s",
            args[0],
            exit_code,
        )
        return CommandResult(exit_code=exit_code, stdout=out, stderr=err)
