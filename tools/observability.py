"""Call instrumentation for the wardrobe and weather collaborators."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from combiner_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

MAX_PREVIEW_ARGS = 6


def _call_preview(func: Callable[..., Any], args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Name the call's arguments, dropping ``self`` and anything past the preview limit."""

    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs).arguments
    except TypeError:
        bound = dict(kwargs)
    named = {key: value for key, value in bound.items() if key != "self"}
    preview = dict(list(named.items())[:MAX_PREVIEW_ARGS])
    if len(named) > MAX_PREVIEW_ARGS:
        preview["truncated"] = True
    return preview


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_tool(tool_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Log start, completion (with result size) and failure of a collaborator call.

    Arguments go through the log redaction, so user ids and locations never
    appear in clear text.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()
            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_started",
                tool=tool_name,
                correlation_id=correlation_id,
                arguments=_call_preview(func, args, kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "tool_call_failed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "tool_call_completed",
                tool=tool_name,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(start),
                result_count=len(result) if isinstance(result, list) else None,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool"]
