"""Settings for the shell execution helpers.

Values are read from ``SHELLEXEC_*`` environment variables. Nothing here is
cached globally; every runner reads its own copy at construction time.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShellSettings(BaseSettings):
    """Settings for command execution."""

    model_config = SettingsConfigDict(
        env_prefix="SHELLEXEC_",
        extra="ignore",
        frozen=True,
    )

    # Lookup utility used to resolve bare command names.
    which_path: str = "/usr/bin/which"

    @field_validator("which_path", mode="before")
    @classmethod
    def _normalize_env_string(cls, value: Any) -> Any:
        """Normalizes env var strings.

        Docker's `--env-file` does not strip quotes, so we trim whitespace and
        strip a single pair of surrounding quotes.
        """

        if value is None or not isinstance(value, str):
            return value
        text = value.strip()
        if len(text) >= 2 and ((text[0] == text[-1] == '"') or (text[0] == text[-1] == "'")):
            text = text[1:-1].strip()
        return text

    @field_validator("which_path")
    @classmethod
    def _require_absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"which_path must be an absolute path, got: {value!r}")
        return value
