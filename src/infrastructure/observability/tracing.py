"""Tracing utilities for instrumenting account operations with OpenTelemetry."""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, overload

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

P = ParamSpec("P")
R = TypeVar("R")

SpanAttributes = dict[str, str | int | float | bool]


def get_tracer(name: str) -> Tracer:
    """Get a tracer for the given module name.

    Args:
        name: Module name, typically __name__.

    Returns:
        A Tracer instance for creating spans.
    """
    return trace.get_tracer(name)


def add_span_attributes(attributes: SpanAttributes) -> None:
    """Add attributes to the current span, if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


def record_auth_outcome(outcome: str, *, reason: str | None = None) -> None:
    """Tag the current span with the result of an authentication decision.

    Args:
        outcome: "accepted" or "rejected".
        reason: Rejection category, when rejected.
    """
    attributes: SpanAttributes = {"auth.outcome": outcome}
    if reason is not None:
        attributes["auth.rejection_reason"] = reason
    add_span_attributes(attributes)


def _finish(span: Span, error: Exception | None, record_exception: bool) -> None:
    if error is None:
        span.set_status(Status(StatusCode.OK))
        return
    if record_exception:
        span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, type(error).__name__))


@overload
def traced(  # noqa: UP047
    func: Callable[P, R],
) -> Callable[P, R]: ...


@overload
def traced(
    func: None = None,
    *,
    span_name: str | None = None,
    attributes: SpanAttributes | None = None,
    record_exception: bool = True,
) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def traced(  # noqa: UP047
    func: Callable[P, R] | None = None,
    *,
    span_name: str | None = None,
    attributes: SpanAttributes | None = None,
    record_exception: bool = True,
) -> Callable[P, R] | Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that runs a function inside its own span.

    Works with both sync and async functions, with or without parentheses.
    The span status only carries the exception type so that messages with
    user data (emails) stay out of span status descriptions.

    Args:
        func: The function to trace (when used without parentheses).
        span_name: Name for the span (defaults to the function's qualified name).
        attributes: Static attributes to add to the span.
        record_exception: Whether to record exceptions on the span.

    Returns:
        The decorated function.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        name = span_name or fn.__qualname__

        def start_span() -> Any:
            # Resolve the tracer per call so a provider set after import is used
            return get_tracer(fn.__module__).start_as_current_span(
                name, record_exception=False, set_status_on_exception=False
            )

        if asyncio.iscoroutinefunction(fn):

            @wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                with start_span() as span:
                    if attributes:
                        span.set_attributes(attributes)
                    try:
                        result = await fn(*args, **kwargs)
                    except Exception as e:
                        _finish(span, e, record_exception)
                        raise
                    _finish(span, None, record_exception)
                    return result

            return async_wrapper  # type: ignore[return-value]

        @wraps(fn)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with start_span() as span:
                if attributes:
                    span.set_attributes(attributes)
                try:
                    result = fn(*args, **kwargs)
                except Exception as e:
                    _finish(span, e, record_exception)
                    raise
                _finish(span, None, record_exception)
                return result

        return sync_wrapper

    if func is not None:
        return decorator(func)
    return decorator
