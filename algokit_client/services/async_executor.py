"""
Async executor for blocking algosdk operations.

algosdk's AlgodClient is synchronous (urllib). Every node call is run in a
thread pool so awaiting callers never block the event loop. Cancelling the
awaiting task abandons the result; no work is rescheduled. The pool is
shared by every client in the process and sized from the global settings.
"""
import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from algokit_client.config import settings

logger = logging.getLogger(__name__)

# Shared executor for node calls
_executor: ThreadPoolExecutor | None = None


def get_executor() -> ThreadPoolExecutor:
    """Lazy-initialize thread pool executor."""
    global _executor
    if _executor is None:
        workers = settings.executor_workers
        _executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="algokit_")
        logger.debug(f"Thread pool executor initialized (max_workers={workers})")
    return _executor


T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run a blocking (synchronous) function in the thread pool.

    Use for: suggested_params, send_transaction(s), status,
    pending_transaction_info, status_after_block, account_info.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        get_executor(),
        functools.partial(func, *args, **kwargs),
    )


def shutdown_executor() -> None:
    """Shutdown the thread pool; a later call re-creates it."""
    global _executor
    if _executor:
        _executor.shutdown(wait=True)
        _executor = None
        logger.debug("Thread pool executor shutdown")
