"""Startup validation for the execution environment.

Callers that rely on bare command names can run these checks once at startup
to fail fast instead of on the first resolution.
"""

from __future__ import annotations

import os
from pathlib import Path

from shellexec.core.config import ShellSettings
from shellexec.integrations.process.subprocess_utils import CommandRunner
from shellexec.shell import ShellError, shell_get_stdout


class ValidationError(RuntimeError):
    """Raised when validation fails."""


def validate_which_utility(*, settings: ShellSettings) -> None:
    """Validates that the lookup utility exists and can resolve a command.

    Args:
        settings: Shell settings.

    Raises:
        ValidationError: If the utility is missing, not executable, or cannot
            resolve ``sh`` to an absolute path.
    """
    which_path = Path(settings.which_path)
    if not which_path.is_file():
        raise ValidationError(
            "Command lookup utility was not found. "
            f"Please verify SHELLEXEC_WHICH_PATH. path={which_path}"
        )
    if not os.access(which_path, os.X_OK):
        raise ValidationError(
            f"Command lookup utility is not executable. path={which_path}"
        )

    # Best-effort: every POSIX system has `sh`, so a working lookup must find it.
    try:
        resolved = shell_get_stdout(
            str(which_path), ["sh"], runner=CommandRunner(settings=settings)
        )
    except ShellError as exc:
        raise ValidationError(
            f"Command lookup utility could not resolve 'sh'. path={which_path} error={exc}"
        ) from exc
    if not resolved.startswith("/"):
        raise ValidationError(
            "Command lookup utility did not return an absolute path for 'sh'. "
            f"path={which_path} output={resolved!r}"
        )


def validate_all(*, settings: ShellSettings) -> None:
    """Validates all configuration.

    Args:
        settings: Shell settings.

    Raises:
        ValidationError: If any validation fails.
    """
    errors: list[str] = []

    try:
        validate_which_utility(settings=settings)
    except ValidationError as exc:
        errors.append(f"Lookup utility validation failed: {exc}")

    if errors:
        error_message = "Startup validation failed:\n\n" + "\n".join(f"  - {err}" for err in errors)
        raise ValidationError(error_message)
