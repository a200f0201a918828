"""
Service layer decorators for common functionality.

This module provides decorators for error handling and logging in the
service layer.
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, Dict, ParamSpec, TypeVar

import structlog

from darts_api.core.exceptions import QueryFailureError, ServiceException

logger = structlog.get_logger(__name__)

# Type variables for generic decorator typing
P = ParamSpec("P")
R = TypeVar("R")


def _build_context(
    func: Callable[..., Any],
    service_name: str,
    include_context: bool,
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    context: Dict[str, Any] = {
        "service": service_name,
        "operation": func.__name__,
    }
    if not include_context:
        return context

    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    for name, value in bound_args.arguments.items():
        if name in ["self", "db", "session"]:
            continue
        # Limit string values to avoid huge log entries
        if isinstance(value, str) and len(value) > 100:
            context[name] = value[:100] + "..."
        else:
            context[name] = str(value)[:200] if value is not None else None
    return context


def service_error_handler(
    service_name: str,
    include_context: bool = True,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for handling service method errors with structured logging.

    Service exceptions are logged and re-raised unchanged. Any other exception
    is wrapped in :class:`QueryFailureError` so callers only ever see the
    service error taxonomy.

    :param service_name: Name of the service (e.g., "PlayerService")
    :param include_context: Whether to include method parameters in log context
    :returns: Decorated coroutine function with error handling

    :example:
        @service_error_handler("PlayerService")
        async def list_players(self, max_ranking: int | None = None):
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _build_context(func, service_name, include_context, args, kwargs)

            try:
                logger.debug("Service method called", **context)
                result = await func(*args, **kwargs)
                logger.debug("Service method completed successfully", **context)
                return result

            except ServiceException as e:
                # Expected outcomes such as "not found" are logged at info level
                log = logger.error if isinstance(e, QueryFailureError) else logger.info
                log(
                    "Service operation ended with service error",
                    error_type=e.__class__.__name__,
                    error_message=e.message,
                    error_context=e.context,
                    **context,
                )
                raise

            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                raise QueryFailureError(
                    message=str(e) or e.__class__.__name__,
                    service=service_name,
                    operation=func.__name__,
                    context=context if include_context else {},
                    original_error=e,
                ) from e

        return wrapper

    return decorator
