"""Deferred field values, evaluated only if no override replaces them."""

import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class Deferred(Generic[T]):
    """Field value computed on demand by calling ``fn`` (sync or async)."""

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[], T | Awaitable[T]]):
        if not callable(fn):
            raise TypeError(f"Deferred expects a callable, got {type(fn).__name__}")
        self.fn = fn

    async def resolve(self) -> T:
        value = self.fn()
        if inspect.isawaitable(value):
            value = await value
        return value

    def __repr__(self):
        return f"<Deferred ({getattr(self.fn, '__name__', self.fn)!r})>"


def deferred(fn: Callable[[], Any]) -> Deferred:
    """Shorthand for ``Deferred(fn)``, handy inside resolver dict literals."""
    return Deferred(fn)
