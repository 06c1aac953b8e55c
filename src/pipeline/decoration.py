"""Decorator for validation steps with timing and rejection logging."""

import functools
import logging
import time
from collections.abc import Callable
from typing import Any

from journey_canon.core.exceptions import JourneyValidationError

logger = logging.getLogger(__name__)


def step(
    *,
    name: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator for validation steps.

    Logs the start and duration of the step at DEBUG. A step rejecting the
    journey (JourneyValidationError) is logged at INFO with its reason code
    and re-raised unchanged; other exceptions propagate without logging.

    Args:
        name: Step name used in log messages. Defaults to the function name
            with leading underscores stripped.

    Example:
        >>> @step()
        ... def check_edges(journey: Journey, geofence: Geofence) -> None:
        ...     ...

    Returns:
        Decorated function
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        step_name = name or func.__name__.lstrip("_")

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            logger.debug("Step '%s' started", step_name)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except JourneyValidationError as err:
                logger.info(
                    "Step '%s' rejected the journey: %s (%s)",
                    step_name,
                    err.code,
                    err.message,
                )
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug("Step '%s' finished in %.1f ms", step_name, elapsed_ms)
            return result

        return wrapper

    return decorator
