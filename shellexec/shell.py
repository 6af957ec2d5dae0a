"""Synchronous shell helpers.

Three entry points cover the usual ways of running a command:

  - ``shell_exec``: stdout discarded, stderr captured for error reporting.
  - ``shell_call``: stdout and stderr passed through to the caller's streams.
  - ``shell_get_stdout``: stdout captured and returned as trimmed text.

Arguments are handed to the executable verbatim; nothing is run through a
shell. Any failure, including a failed lookup of a bare command name, is
raised as ``ShellError``.
"""

from __future__ import annotations

import errno
import logging
from collections.abc import Callable, Mapping, Sequence
from os import PathLike

from shellexec.integrations.process.subprocess_utils import CommandRunner, Sink
from shellexec.text_utils import trim

ShellOutFunction = Callable[[str, Sequence[str], str | None, Mapping[str, str] | None], str]
ShellCallFunction = Callable[[str, Sequence[str], str | None, Mapping[str, str] | None], None]

GENERIC_ERROR_MESSAGE = "Failed command"
NO_ERROR_OUTPUT_MESSAGE = "No error returned from the process."

_logger = logging.getLogger(__name__)


class ShellError(RuntimeError):
    """Raised when a command exits with a non-zero status or cannot run."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


def shell_exec(
    cmd: str,
    args: Sequence[str] = (),
    cwd: str | PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Runs a command with stdout discarded.

    Raises:
        ShellError: If the command fails; the message includes its stderr.
    """

    shell_internal(
        cmd,
        args,
        stdout=Sink.DISCARD,
        stderr=Sink.CAPTURE,
        cwd=cwd,
        env=env,
        runner=runner,
    )


def shell_call(
    cmd: str,
    args: Sequence[str] = (),
    cwd: str | PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Runs a command attached to the caller's stdout and stderr.

    Raises:
        ShellError: If the command fails. The message is generic because the
            error stream went to the caller.
    """

    shell_internal(
        cmd,
        args,
        stdout=Sink.INHERIT,
        stderr=Sink.INHERIT,
        cwd=cwd,
        env=env,
        runner=runner,
    )


def shell_get_stdout(
    cmd: str,
    args: Sequence[str] = (),
    cwd: str | PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
    *,
    runner: CommandRunner | None = None,
) -> str:
    """Runs a command and returns its stdout with trailing newlines trimmed.

    Output that is not valid UTF-8 is returned as an empty string.

    Raises:
        ShellError: If the command fails; the message includes its stderr.
    """

    output = shell_internal(
        cmd,
        args,
        stdout=Sink.CAPTURE,
        stderr=Sink.CAPTURE,
        cwd=cwd,
        env=env,
        runner=runner,
    )
    return trim(_decode(output) or "")


def which(cmd: str, *, runner: CommandRunner | None = None) -> str:
    """Resolves a bare command name to an absolute path with the lookup utility."""

    runner = runner or CommandRunner()
    return shell_get_stdout(runner.settings.which_path, [cmd], runner=runner)


def shell_internal(
    cmd: str,
    args: Sequence[str] = (),
    *,
    stdout: Sink,
    stderr: Sink,
    cwd: str | PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
    runner: CommandRunner | None = None,
) -> bytes | None:
    """Runs ``cmd`` to completion and raises on a non-zero exit.

    Args:
        cmd: Absolute executable path, or a bare name resolved with ``which``.
        args: Arguments passed to the executable unchanged.
        stdout: Sink for standard output.
        stderr: Sink for standard error. Only a captured stream can be quoted
            in the error message.
        cwd: Working directory override.
        env: Full environment for the child. It is not merged with the
            caller's environment, so ``PATH`` and friends must be included
            when needed.
        runner: Runner to spawn with; a fresh one is built when None.

    Returns:
        Captured stdout bytes when ``stdout`` is ``Sink.CAPTURE``, otherwise None.

    Raises:
        ShellError: If resolution fails, the process cannot be started, or it
            exits with a non-zero status.
        ValueError: If ``cmd`` is empty.
    """

    if not cmd:
        raise ValueError("cmd must not be empty.")

    runner = runner or CommandRunner()
    if cmd.startswith("/"):
        abs_cmd = cmd
    else:
        abs_cmd = which(cmd, runner=runner)
        _logger.debug("command resolved: cmd=%s path=%s", cmd, abs_cmd)

    try:
        result = runner.run(
            args=[abs_cmd, *args],
            stdout=stdout,
            stderr=stderr,
            cwd=cwd,
            env=env,
        )
    except OSError as exc:
        exit_code = 127 if exc.errno == errno.ENOENT else 126
        _logger.warning(
            "command could not be started: path=%s exit_code=%s error=%s",
            abs_cmd,
            exit_code,
            exc.strerror or exc,
        )
        raise ShellError(f"status {exit_code}: {exc.strerror or exc}", exit_code) from exc

    if result.exit_code != 0:
        if stderr is not Sink.CAPTURE:
            # Error stream went elsewhere so its content cannot be inspected.
            raise ShellError(GENERIC_ERROR_MESSAGE, result.exit_code)
        error_text = _decode(result.stderr) or NO_ERROR_OUTPUT_MESSAGE
        raise ShellError(f"status {result.exit_code}: {trim(error_text)}", result.exit_code)
    return result.stdout


def _decode(data: bytes | None) -> str | None:
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
