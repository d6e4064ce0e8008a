"""Selection of the final outcome of a dispatched lookup."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from lagoinha.dispatcher import Dispatch
from lagoinha.models import LagoinhaError, LookupResult, Source

logger = logging.getLogger(__name__)


async def _next_message(dispatch: Dispatch) -> Optional[LookupResult]:
    """Wait for the next queued result.

    Returns None when the queue is empty and no provider is left in flight,
    meaning the message expected for this slot will never arrive.
    """
    queue = dispatch.queue
    while True:
        if not queue.empty():
            return queue.get_nowait()

        pending = dispatch.pending
        if not pending:
            return None

        getter = asyncio.ensure_future(queue.get())
        try:
            await asyncio.wait({getter, *pending}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not getter.done():
                # Any item stays queued; Queue.get only dequeues on resumption
                getter.cancel()
        if getter.done() and not getter.cancelled():
            return getter.result()


async def aggregate(dispatch: Dispatch) -> LookupResult:
    """Return the first successful result, or a composite of every failure.

    Reads at most ``dispatch.expected`` messages. A success is returned as
    soon as it is read. Providers still running are not cancelled here, but
    the handle is closed so their late results are dropped. A slot whose
    message can no longer arrive is recorded as an unexpected library error.
    """
    errors: list[LagoinhaError] = []

    try:
        for _ in range(dispatch.expected):
            message = await _next_message(dispatch)
            if message is None:
                errors.append(
                    LagoinhaError.unexpected(Source.LAGOINHA, "provider finished without a result")
                )
            elif message.error is not None:
                errors.append(message.error)
            else:
                logger.debug("Resolved %r via %s", dispatch.cep, message.source)
                return message
    finally:
        # Providers finishing from here on must not wait on a reader
        dispatch.close()

    error = LagoinhaError.all_services_failed(errors)
    logger.warning("All providers failed for %r: %s", dispatch.cep, error)
    return LookupResult.failed(dispatch.cep, error)
