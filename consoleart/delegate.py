"""A multicast callable: a list of functions invoked together."""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

A = TypeVar("A")
R = TypeVar("R")


class Delegate(Generic[A, R]):
    """Holds functions of one argument and calls them in the order they were added."""

    def __init__(self) -> None:
        self._functions: list[Callable[[A], R]] = []

    def __call__(self, arg: A) -> R:
        """Call every function with ``arg`` and return the last one's result."""
        if not self._functions:
            raise RuntimeError("delegate has no functions to invoke")
        *rest, last = self._functions
        for func in rest:
            func(arg)
        return last(arg)

    def __iadd__(self, func: Callable[[A], R] | None) -> "Delegate[A, R]":
        if func:
            self._functions.append(func)
        return self

    def __isub__(self, func: Callable[[A], R] | None) -> "Delegate[A, R]":
        if func:
            self._functions = [f for f in self._functions if f != func]
        return self

    def __len__(self) -> int:
        return len(self._functions)

    def invocation_list(self, arg: A) -> list[R]:
        """Call every function with ``arg`` and return all results in order."""
        return [func(arg) for func in self._functions]

    def __repr__(self) -> str:
        names: list[Any] = [getattr(f, "__name__", f) for f in self._functions]
        return f"Delegate({names!r})"