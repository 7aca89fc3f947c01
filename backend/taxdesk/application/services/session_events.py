"""Session event broadcaster — in-process fan-out of table session changes."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


class SessionEventBroadcaster:
    """Broadcasts session changes to subscribed SSE clients.

    Each subscriber gets its own bounded asyncio.Queue. A subscriber whose
    queue is full is disconnected rather than allowed to block the session.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Yield formatted SSE strings until shutdown or disconnect."""
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._max_queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    async def broadcast(self, event_type: str, data: dict[str, Any]) -> None:
        """Push an SSE event to every subscriber."""
        sse_message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("Session event queue full — disconnecting subscriber")

        for q in dead_queues:
            self._queues.remove(q)
            _close(q)

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queue in self._queues:
            _close(queue)
        self._queues.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)


def _close(queue: asyncio.Queue[str | None]) -> None:
    # A full queue cannot take the sentinel; drop its backlog first.
    while queue.full():
        queue.get_nowait()
    queue.put_nowait(None)
