"""
ledgermsg/ledger/async_adapter.py
One generic adapter from error-first callbacks to awaitables.

  result = await call_async(client.find_transaction_objects, search_values)

The operation is called with the given arguments plus a trailing
callback(error, result). A falsy error resolves with result. Otherwise
the await raises the client's error: an exception instance is raised
as-is (same object), any other value is wrapped in LedgerCallbackError
with the original kept on .error.

Only the first callback settles the await; later calls are ignored.
The callback may fire synchronously, later on the loop, or from another
thread.
"""

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class LedgerCallbackError(Exception):
    """Carries a non-exception error value reported by a ledger callback."""

    def __init__(self, error: Any):
        super().__init__(f"Ledger operation failed: {error!r}")
        self.error = error


async def call_async(operation: Callable[..., Any], *args: Any) -> Any:
    loop   = asyncio.get_running_loop()
    future = loop.create_future()
    name   = getattr(operation, '__name__', repr(operation))

    def _settle(error: Any, result: Any) -> None:
        if future.done():
            logger.debug(f"{name}: callback fired again, ignored")
            return
        if error:
            if not isinstance(error, BaseException):
                error = LedgerCallbackError(error)
            future.set_exception(error)
        else:
            future.set_result(result)

    def _callback(error: Any = None, result: Any = None) -> None:
        loop.call_soon_threadsafe(_settle, error, result)

    operation(*args, _callback)
    return await future
