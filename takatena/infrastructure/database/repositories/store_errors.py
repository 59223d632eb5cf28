from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError

from takatena.application.errors import StoreError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def wrap_store_errors(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Re-raise driver/ORM failures as StoreError after logging them."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("store_operation_failed", operation=func.__qualname__)
            raise StoreError(f"{func.__qualname__} failed") from exc

    return wrapper
