"""Printing of labelled result pairs."""

from __future__ import annotations

import sys
from typing import Any, Iterable, TextIO


def _format_value(value: Any, precision: int | None) -> str:
    if precision is not None and isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def format_results(data: Iterable[tuple[Any, Any]], precision: int | None = None) -> str:
    """Render pairs one per line as ``first second``, followed by a blank line.

    With ``precision`` set, floating-point values are shown in fixed notation
    with that many decimals.
    """
    lines = "".join(
        f"{_format_value(first, precision)} {_format_value(second, precision)}\n"
        for first, second in data
    )
    return lines + "\n"


def print_results(
    data: Iterable[tuple[Any, Any]],
    stream: TextIO | None = None,
    precision: int | None = None,
) -> None:
    """Write :func:`format_results` output to ``stream`` (standard output by default)."""
    target = stream if stream is not None else sys.stdout
    target.write(format_results(data, precision))