"""Library identification text."""

from __future__ import annotations

import platform

VERSION = "7.0"
_DESCRIPTION = "Console art image library"


def about_library() -> str:
    """Return a short multi-line description of the library and its runtime."""
    return (
        f"ConsoleLib {VERSION}\n"
        f"{_DESCRIPTION}\n"
        f"Python version: {platform.python_version()}"
    )