"""Transport — bidirectional named-event channel to the hub.

The boundary only needs ``emit`` and ``on`` plus connection control.
``SocketIOTransport`` provides them over Socket.IO; reconnection is left
to the Socket.IO client.
"""

import logging
from typing import Any, Callable, Protocol, runtime_checkable

import socketio

logger = logging.getLogger("kozz_boundary.transport")


@runtime_checkable
class Transport(Protocol):
    async def connect(self, url: str, socket_path: str) -> None: ...

    async def disconnect(self) -> None: ...

    async def emit(self, event_name: str, payload: Any) -> None: ...

    def on(self, event_name: str, callback: Callable) -> None: ...

    async def wait(self) -> None: ...


class SocketIOTransport:
    """Socket.IO client transport."""

    def __init__(self, client: socketio.AsyncClient | None = None):
        self._client = client or socketio.AsyncClient(reconnection=True)

    @property
    def connected(self) -> bool:
        return self._client.connected

    async def connect(self, url: str, socket_path: str = "/socket.io/") -> None:
        # python-socketio wants the path without surrounding slashes
        path = socket_path.strip("/") or "socket.io"
        logger.info(f"Connecting to hub at {url} (path /{path}/)...")
        await self._client.connect(url, socketio_path=path)

    async def disconnect(self) -> None:
        if self._client.connected:
            await self._client.disconnect()
            logger.info("Disconnected from hub.")

    async def emit(self, event_name: str, payload: Any) -> None:
        await self._client.emit(event_name, payload)

    def on(self, event_name: str, callback: Callable) -> None:
        self._client.on(event_name, callback)

    async def wait(self) -> None:
        await self._client.wait()
