"""
Best-effort remote calls with a deterministic local fallback
"""
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar
import logging

from bigback.services.openai_service import NutritionServiceError, ServiceNotConfiguredError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Value of a fail-soft call and the error that forced the fallback, if any"""
    value: T
    error: Optional[Exception] = None

    @property
    def used_fallback(self) -> bool:
        return self.error is not None


async def fetch_with_fallback(
    request: Awaitable[T],
    fallback: Callable[[], T],
    description: str = "request"
) -> FetchResult[T]:
    """
    Await request; on any failure return fallback() instead

    Transport, decode and missing-field errors are treated alike: the error is
    logged and kept on the result, nothing is retried.
    """
    try:
        return FetchResult(value=await request)
    except ServiceNotConfiguredError as e:
        logger.info(f"{description}: service not configured, using fallback")
        return FetchResult(value=fallback(), error=e)
    except NutritionServiceError as e:
        logger.warning(f"{description} failed, using fallback: {e}")
        return FetchResult(value=fallback(), error=e)
    except Exception as e:
        logger.exception(f"{description} failed unexpectedly, using fallback: {e}")
        return FetchResult(value=fallback(), error=e)
