"""WebSocket push channel for the display screens.

Clients open a plain WebSocket at ``/<WS_PATH>`` and receive every broadcast
as one JSON text frame ``{"type": ..., "payload": ...}``. The channel is
server-to-client only; anything a client sends is ignored.
"""

from __future__ import annotations

import json
import logging
import uuid
from threading import Lock
from typing import Any

from flask import Flask
from flask_sock import Sock
from simple_websocket import ConnectionClosed

from luckydraw.runtime import Runtime
from luckydraw.services.broadcast_hub import EventType

logger = logging.getLogger(__name__)


class DisplayConnections:
    """Open sockets by client id; used as the hub's emitter."""

    def __init__(self) -> None:
        self._sockets: dict[str, Any] = {}
        self._lock = Lock()

    def add(self, client_id: str, ws: Any) -> None:
        with self._lock:
            self._sockets[client_id] = ws

    def discard(self, client_id: str) -> None:
        with self._lock:
            self._sockets.pop(client_id, None)

    def __call__(self, envelope: dict[str, Any], client_id: str) -> None:
        with self._lock:
            ws = self._sockets.get(client_id)
        if ws is None:
            raise ConnectionError(f"No open socket for {client_id}")
        ws.send(json.dumps(envelope, ensure_ascii=False))


def init_push_channel(app: Flask, runtime: Runtime) -> Sock:
    """Mount the display WebSocket on ``app`` and bind it to the runtime's hub."""

    sock = Sock(app)
    connections = DisplayConnections()
    hub = runtime.hub
    hub.bind(connections)

    path = "/" + str(app.config.get("WS_PATH", "ws")).strip("/")

    @sock.route(path)
    def display_channel(ws):  # type: ignore[no-untyped-def]
        client_id = uuid.uuid4().hex
        connections.add(client_id, ws)
        hub.register(client_id)
        try:
            # Late joiners catch up straight away instead of waiting for a change.
            hub.send_to(client_id, EventType.STATE_UPDATE, runtime.session.full_state())
            while True:
                ws.receive()
        except ConnectionClosed:
            logger.debug("Display socket %s closed by peer", client_id)
        finally:
            hub.unregister(client_id)
            connections.discard(client_id)

    app.extensions["sock"] = sock
    return sock
