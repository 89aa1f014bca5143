"""Helpers that map sequences of values through conversion functions."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

S = TypeVar("S")
T = TypeVar("T")


def convert(items: Iterable[S], func: Callable[[S], T]) -> list[T]:
    """Apply an infallible conversion to every item."""
    return [func(item) for item in items]


def try_convert(items: Iterable[S], func: Callable[[S], T]) -> list[T]:
    """Apply a fallible conversion to every item.

    The first error raised by ``func`` propagates and no further items are
    converted.
    """
    converted: list[T] = []
    for item in items:
        converted.append(func(item))
    return converted