"""Fan-out of server-sent notification events to connected HTTP clients."""

import asyncio
import itertools
import json
import logging
import time
from typing import Any, AsyncIterator, Dict, Optional

logger = logging.getLogger(__name__)


class EventBroadcaster:
    """Delivers events to every subscribed SSE stream.

    Each subscriber owns a bounded queue; subscribers that fall behind are
    dropped.
    """

    def __init__(self, max_queue_size: int = 100):
        self.max_queue_size = max_queue_size
        self._subscribers: Dict[str, asyncio.Queue] = {}
        self._event_ids = itertools.count(1)
        self._client_ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _next_event(self, event_type: str, data: Dict[str, Any]) -> Dict[str, str]:
        return {
            "id": f"event-{next(self._event_ids)}",
            "event": event_type,
            "data": json.dumps(
                {"type": event_type, "data": data, "timestamp": int(time.time() * 1000)}
            ),
        }

    def publish(self, event_type: str, data: Dict[str, Any]) -> int:
        """Queue an event for all subscribers; returns how many received it."""
        event = self._next_event(event_type, data)
        delivered = 0
        for client_id, queue in list(self._subscribers.items()):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropping slow SSE subscriber {client_id}")
                self._subscribers.pop(client_id, None)
        return delivered

    async def stream(
        self, client_id: Optional[str] = None
    ) -> AsyncIterator[Dict[str, str]]:
        """Yield a ``connected`` event, then every published event.

        A ``client_id`` already held by another stream gets a numeric suffix,
        so every connection owns its own queue.
        """
        if client_id is None:
            client_id = f"client-{next(self._client_ids)}"
        elif client_id in self._subscribers:
            client_id = f"{client_id}-{next(self._client_ids)}"
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.max_queue_size)
        self._subscribers[client_id] = queue
        logger.debug(f"SSE subscriber {client_id} connected")
        try:
            yield self._next_event("connected", {"clientId": client_id})
            while self._subscribers.get(client_id) is queue:
                yield await queue.get()
        finally:
            if self._subscribers.get(client_id) is queue:
                del self._subscribers[client_id]
            logger.debug(f"SSE subscriber {client_id} disconnected")
