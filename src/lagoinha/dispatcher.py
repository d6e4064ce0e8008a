"""Fan-out of one CEP lookup to every provider.

Each provider runs as its own asyncio task and delivers exactly one
LookupResult into a shared bounded queue. Nothing is returned directly:
the aggregator decides the outcome from queue arrival order, since the
first provider to finish may well have failed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from lagoinha.models import LagoinhaError, LookupResult
from lagoinha.protocols import ProviderProtocol

logger = logging.getLogger(__name__)

# Capacity of the per-lookup result queue
CHANNEL_CAPACITY = 1


@dataclass
class Dispatch:
    """Handle on one in-flight lookup.

    Attributes:
        cep: The CEP being looked up.
        queue: Results, one per provider that completes.
        tasks: One task per provider.
        closed: Set once the aggregator stops reading. Results finishing
            after that are queued only if there is room, otherwise dropped.
    """

    cep: str
    queue: asyncio.Queue[LookupResult]
    tasks: list[asyncio.Task[None]] = field(default_factory=list)
    closed: bool = False
    # Provider tasks blocked on a full queue
    delivering: set[asyncio.Task[None]] = field(default_factory=set)

    @property
    def expected(self) -> int:
        """Number of messages the aggregator may read."""
        return len(self.tasks)

    @property
    def pending(self) -> list[asyncio.Task[None]]:
        """Provider tasks still in flight."""
        return [task for task in self.tasks if not task.done()]

    def close(self) -> int:
        """Stop accepting results and release providers waiting to deliver one.

        Lookups still running are not touched; they finish on their own and
        their results are dropped.

        Returns:
            Number of blocked deliveries released.
        """
        self.closed = True
        blocked = list(self.delivering)
        for task in blocked:
            task.cancel()
        if blocked:
            logger.debug("Dropped %d late result(s) for %r", len(blocked), self.cep)
        return len(blocked)

    def cancel(self) -> int:
        """Cancel every provider still in flight.

        Returns:
            Number of tasks cancelled.
        """
        pending = self.pending
        for task in pending:
            task.cancel()
        if pending:
            logger.debug("Cancelled %d pending provider(s) for %r", len(pending), self.cep)
        return len(pending)


async def _deliver(handle: Dispatch, result: LookupResult) -> None:
    try:
        handle.queue.put_nowait(result)
        return
    except asyncio.QueueFull:
        if handle.closed:
            logger.debug("Dropping late result for %r", handle.cep)
            return

    task = asyncio.current_task()
    handle.delivering.add(task)
    try:
        await handle.queue.put(result)
    finally:
        handle.delivering.discard(task)


async def _run_provider(provider: ProviderProtocol, handle: Dispatch) -> None:
    cep = handle.cep
    try:
        result = await provider.lookup(cep)
    except Exception as exc:
        # Third-party providers may not honour the no-raise contract
        logger.warning("Provider %s raised for %r: %s", provider.source.value, cep, exc)
        result = LookupResult.failed(cep, LagoinhaError.unexpected(provider.source, str(exc)))
    await _deliver(handle, result)


def dispatch(cep: str, providers: Sequence[ProviderProtocol]) -> Dispatch:
    """Start every provider concurrently against one CEP.

    Must be called from a running event loop.

    Args:
        cep: Raw CEP as given by the caller.
        providers: Providers to query.

    Returns:
        Dispatch handle whose queue receives one result per provider.

    Raises:
        ValueError: If no provider is configured.
    """
    if not providers:
        raise ValueError("No CEP providers configured; at least one is required")

    handle = Dispatch(cep=cep, queue=asyncio.Queue(maxsize=CHANNEL_CAPACITY))
    handle.tasks = [
        asyncio.create_task(
            _run_provider(provider, handle),
            name=f"lagoinha-{provider.source.value}",
        )
        for provider in providers
    ]
    logger.debug("Dispatched %r to %d provider(s)", cep, len(handle.tasks))
    return handle
