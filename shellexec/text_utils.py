"""Text helpers for process output."""

from __future__ import annotations


def trim(text: str) -> str:
    """Strips trailing line terminators from ``text``.

    The first matching terminator kind wins: ``"\\r\\n"`` is checked before
    ``"\\n"``, and every trailing occurrence of that kind is removed. A
    ``"\\r\\n"`` pair counts as one terminator, so stripping bare ``"\\n"``
    stops at it. A string made only of the terminator becomes empty.
    """

    if text.endswith("\r\n"):
        while text.endswith("\r\n"):
            text = text[:-2]
        return text
    if text.endswith("\n"):
        while text.endswith("\n") and not text.endswith("\r\n"):
            text = text[:-1]
        return text
    return text
