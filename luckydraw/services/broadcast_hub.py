"""In-process fan-out of display events to connected push clients."""

from __future__ import annotations

import logging
from enum import Enum
from threading import Lock
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    STATE_UPDATE = "state_update"
    ROLLING_START = "rolling_start"
    ROLLING_STOP = "rolling_stop"
    RESET = "reset"
    SHOW_QRCODE = "show_qrcode"


# (envelope, client_id) -> None; raises on a dead client.
Emitter = Callable[[dict[str, Any], str], None]


class BroadcastHub:
    """Registry of live client ids and best-effort delivery to each of them.

    Delivery is at-most-once with no retry; a client that misses an event
    re-fetches the full state when it reconnects.
    """

    def __init__(self, emitter: Emitter | None = None) -> None:
        self._emitter = emitter
        self._clients: set[str] = set()
        self._lock = Lock()

    def bind(self, emitter: Emitter) -> None:
        self._emitter = emitter

    def register(self, client_id: str) -> None:
        with self._lock:
            self._clients.add(client_id)
            total = len(self._clients)
        logger.info("Display client connected: %s (total %d)", client_id, total)

    def unregister(self, client_id: str) -> None:
        with self._lock:
            self._clients.discard(client_id)
            total = len(self._clients)
        logger.info("Display client disconnected: %s (total %d)", client_id, total)

    @property
    def client_count(self) -> int:
        with self._lock:
            return len(self._clients)

    def send_to(self, client_id: str, event_type: EventType | str, payload: Any = None) -> bool:
        """Deliver one envelope to one client; False (and deregistered) on failure."""

        if self._emitter is None:
            return False
        envelope = {"type": EventType(event_type).value, "payload": payload}
        try:
            self._emitter(envelope, client_id)
            return True
        except Exception:
            logger.warning("Dropping display client %s after failed send", client_id, exc_info=True)
            self.unregister(client_id)
            return False

    def publish(self, event_type: EventType | str, payload: Any = None) -> int:
        """Send an event to every registered client. Never raises.

        Returns the number of clients the event was handed to.
        """

        try:
            kind = EventType(event_type)
        except ValueError:
            logger.error("Refusing to publish unknown event type %r", event_type)
            return 0
        if self._emitter is None:
            logger.debug("No emitter bound, dropping %s", kind.value)
            return 0

        with self._lock:
            clients = sorted(self._clients)
        delivered = 0
        for client_id in clients:
            if self.send_to(client_id, kind, payload):
                delivered += 1
        logger.debug("Published %s to %d/%d clients", kind.value, delivered, len(clients))
        return delivered

    def state_update(self, snapshot: dict[str, Any]) -> int:
        return self.publish(EventType.STATE_UPDATE, snapshot)

    def rolling_start(self, count: int, prize_id: str) -> int:
        return self.publish(EventType.ROLLING_START, {"count": count, "prizeId": prize_id})

    def rolling_stop(self, winners: list[str]) -> int:
        return self.publish(EventType.ROLLING_STOP, {"winners": list(winners)})

    def reset(self) -> int:
        return self.publish(EventType.RESET)

    def show_qrcode(self, show: bool, url: str, message: str) -> int:
        return self.publish(EventType.SHOW_QRCODE, {"show": show, "url": url, "message": message})
