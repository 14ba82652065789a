import functools
import inspect
import time

from core.logging import get_logger

logger = get_logger(__name__)


def _log_elapsed(stage_name: str, t0: float, failed: bool) -> None:
    suffix = " (failed)" if failed else ""
    logger.info(f"[PERF] {stage_name}: {(time.perf_counter() - t0) * 1000:.1f} ms{suffix}")


def profile_stage(stage_name: str):
    """Decorator to log how long a stage takes, and whether it raised.

    Works with both coroutine functions and plain callables.
    """
    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                t0 = time.perf_counter()
                failed = True
                try:
                    result = await func(*args, **kwargs)
                    failed = False
                    return result
                finally:
                    _log_elapsed(stage_name, t0, failed)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            t0 = time.perf_counter()
            failed = True
            try:
                result = func(*args, **kwargs)
                failed = False
                return result
            finally:
                _log_elapsed(stage_name, t0, failed)
        return wrapper
    return decorator
