"""
Base service class.

Provides common functionality for all service classes including store access,
logging, and helper decorators.
"""

import functools
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from loguru import logger

from app.services.store import PlatformStore
from app.utils.clock import Clock, SystemClock


# Type variable for generic decorator return types
T = TypeVar("T")


@dataclass
class ServiceResult:
    """
    Standard service result container.

    Used to return structured results from service methods. Validation and
    business failures come back here instead of being raised.
    """
    success: bool
    data: Any = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: str, data: Any = None) -> "ServiceResult":
        return cls(success=False, data=data, error=error, error_code=error_code)


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Store access
    - Injected clock
    - Logging with bound service context
    """

    def __init__(self, store: PlatformStore, clock: Clock | None = None) -> None:
        """
        Initialize base service.

        Args:
            store: Platform store holding the aggregates
            clock: Time source (wall clock by default)
        """
        self.store = store
        self.clock = clock or SystemClock()
        self.logger = logger.bind(service=self.__class__.__name__)

    def now(self) -> datetime:
        return self.clock.now()


def log_operation(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to log method entry/exit with timing.

    Logs:
    - Method entry
    - Method exit with duration
    - Exceptions if any

    Args:
        func: Async method to wrap

    Returns:
        Wrapped async method
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> Any:
        start_time = time.monotonic()
        self.logger.debug(f"Starting {func.__name__}")

        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            duration = time.monotonic() - start_time
            self.logger.opt(exception=True).error(
                f"Failed {func.__name__} after {duration:.3f}s: {e}"
            )
            raise

        duration = time.monotonic() - start_time
        self.logger.debug(f"Completed {func.__name__} in {duration:.3f}s")
        return result

    return wrapper
