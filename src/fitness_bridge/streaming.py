"""Bounded-queue stream subscriptions between host callbacks and subscribers."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional

import structlog

from . import metrics
from .errors import BridgeError

logger = structlog.get_logger(__name__)


class EventSink(ABC):
    """Downstream consumer of stream events."""

    @abstractmethod
    async def emit(self, event: Any) -> None:
        """Deliver one event."""

    @abstractmethod
    async def error(self, error: BridgeError) -> None:
        """Deliver a terminal error signal."""


class QueueEventSink(EventSink):
    """Buffers events for a single reader such as a WebSocket pump."""

    def __init__(self, maxsize: int = 0):
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)

    async def emit(self, event: Any) -> None:
        await self.queue.put(event)

    async def error(self, error: BridgeError) -> None:
        await self.queue.put(error)

    async def get(self) -> Any:
        return await self.queue.get()

    def drain(self) -> List[Any]:
        """Return everything buffered so far without waiting."""
        items = []
        while not self.queue.empty():
            items.append(self.queue.get_nowait())
        return items


class FanoutSink(EventSink):
    """Delivers every event to each wrapped sink in order."""

    def __init__(self, sinks: Iterable[EventSink]):
        self.sinks = list(sinks)

    async def emit(self, event: Any) -> None:
        for sink in self.sinks:
            await sink.emit(event)

    async def error(self, error: BridgeError) -> None:
        for sink in self.sinks:
            await sink.error(error)


class StreamSubscription:
    """One subscriber's view of a sensor stream.

    Host callbacks call `offer` with raw items. A single consumer task takes
    them off a bounded queue one at a time, runs `handler` to completion and
    forwards the resulting events to the sink, so an item is fully processed
    before the next one is looked at. When the queue is full the oldest
    waiting item is dropped.

    `cancel` detaches from the source before returning; after that nothing
    else reaches the sink.
    """

    def __init__(
        self,
        stream: str,
        handler: Callable[[Any], List[Any]],
        sink: EventSink,
        maxsize: int = 256,
        detach: Optional[Callable[[], None]] = None,
    ):
        self.stream = stream
        self.handler = handler
        self.sink = sink
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._detach = detach
        self._task: Optional[asyncio.Task] = None
        self._cancelled = False
        self.dropped = 0

    @property
    def active(self) -> bool:
        return not self._cancelled

    def set_detach(self, detach: Callable[[], None]) -> None:
        self._detach = detach

    def start(self) -> None:
        """Start the consumer task on the running loop."""
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        metrics.active_subscriptions.labels(stream=self.stream).inc()
        logger.info("Stream subscription started", stream=self.stream)

    def offer(self, item: Any) -> None:
        """Host-side callback: enqueue without blocking."""
        if self._cancelled:
            return
        if self._queue.full():
            self._queue.get_nowait()
            self._queue.task_done()
            self.dropped += 1
            metrics.samples_dropped.labels(stream=self.stream).inc()
            logger.debug("Subscription queue full, dropped oldest item", stream=self.stream)
        self._queue.put_nowait(item)

    async def _run(self) -> None:
        while not self._cancelled:
            item = await self._queue.get()
            try:
                if self._cancelled:
                    return
                events = self.handler(item)
                for event in events:
                    if self._cancelled:
                        return
                    await self.sink.emit(event)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(
                    "Stream handler failed, closing subscription",
                    stream=self.stream,
                    error=str(e),
                    exc_info=True,
                )
                self.cancel()
                return
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every offered item has been processed and emitted."""
        await self._queue.join()

    def cancel(self) -> None:
        """Detach from the source and stop delivering events."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._detach is not None:
            self._detach()
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        if self._task is not None:
            if self._task is not asyncio.current_task():
                self._task.cancel()
            metrics.active_subscriptions.labels(stream=self.stream).dec()
        logger.info("Stream subscription cancelled", stream=self.stream, dropped=self.dropped)

    async def wait_closed(self) -> None:
        """Wait for the consumer task to finish after `cancel`."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass
