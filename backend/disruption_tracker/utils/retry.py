import asyncio
from typing import Awaitable, Callable, Optional, TypeVar
from loguru import logger

T = TypeVar("T")


async def retry_async(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 2,
    delay: float = 0.5,
    backoff: float = 2.0,
    exceptions: tuple = (Exception,),
    label: Optional[str] = None,
) -> T:
    """
    Retry an async call with exponential backoff

    Used for upstream index calls where a single transient failure would
    otherwise drop a whole source for the run.

    Args:
        func: Zero-argument coroutine factory
        max_attempts: Maximum number of attempts
        delay: Initial delay between attempts in seconds
        backoff: Backoff multiplier
        exceptions: Exception types that trigger a retry
        label: Context for log messages

    Returns:
        Result of the first successful call

    Raises:
        The last exception once all attempts fail
    """
    current_delay = delay
    label = label or getattr(func, "__name__", "call")

    for attempt in range(1, max_attempts + 1):
        try:
            return await func()
        except exceptions as e:
            if attempt >= max_attempts:
                logger.error(f"{label}: all {max_attempts} attempts failed")
                raise
            logger.warning(
                f"{label}: attempt {attempt}/{max_attempts} failed: {e}. "
                f"Retrying in {current_delay}s..."
            )
            await asyncio.sleep(current_delay)
            current_delay *= backoff
