#!filepath: fuel_regression/utils/retry.py
import random
import asyncio
from typing import Callable, Tuple, Type

from fuel_regression.utils.logger import logs


class AsyncRetry:
    """
    Async retry with exponential backoff and jitter.

    Only adapters use this (e.g. the HTTP record source);
    pipeline stages never retry.
    """

    @staticmethod
    async def run(
        func: Callable,
        *args,
        exceptions: Tuple[Type[Exception], ...] = (Exception,),
        max_attempts: int = 3,
        delay: float = 1.0,
        backoff: float = 2.0,
        jitter: bool = True,
        **kwargs,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        attempt = 1
        while True:
            try:
                return await func(*args, **kwargs)

            except exceptions as e:
                if attempt >= max_attempts:
                    logs.error(
                        f"[AsyncRetry] {func.__name__} failed after {attempt} attempt(s)"
                    )
                    raise

                wait = delay * (backoff ** (attempt - 1))
                if jitter:
                    wait = wait * random.uniform(0.8, 1.2)

                logs.warning(
                    f"[AsyncRetry] attempt {attempt}/{max_attempts} failed: {e}. "
                    f"retry in {wait:.2f}s"
                )
                await asyncio.sleep(wait)

                attempt += 1
