"""Spans around access decisions."""

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace

# Identifiers only; never copy permission contexts or grant payloads onto spans.
_RECORDED_ARGS = frozenset({
    "user_id", "grant_id", "role", "permission", "resource_type",
    "delegator_id", "delegate_id",
})


R = TypeVar("R")


def _attr_value(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def traced(span_name: str) -> Callable[
    [Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]
]:
    """Run a coroutine method inside a span named span_name.

    Identifier arguments (user, grant, role, permission ids) are recorded as
    ``arg.<name>`` attributes whether passed positionally or by keyword.
    Exceptions are recorded on the span by the tracer and propagate.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        tracer = trace.get_tracer(func.__module__)
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            with tracer.start_as_current_span(span_name) as span:
                if span.is_recording():
                    bound = signature.bind_partial(*args, **kwargs)
                    for name, value in bound.arguments.items():
                        if name in _RECORDED_ARGS and value is not None:
                            span.set_attribute(f"arg.{name}", _attr_value(value))
                return await func(*args, **kwargs)

        return wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes (e.g. the decision outcome) to the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)
