"""Pytest configuration and shared fixtures."""

import pytest


class FakeTransport:
    """In-memory transport: records emits, lets tests deliver hub events."""

    def __init__(self):
        self.handlers = {}
        self.emitted = []
        self.connected_to = None

    async def connect(self, url, socket_path="/socket.io/"):
        self.connected_to = (url, socket_path)
        if "connect" in self.handlers:
            await self.handlers["connect"]()

    async def disconnect(self):
        self.connected_to = None

    async def emit(self, event_name, payload):
        self.emitted.append((event_name, payload))

    def on(self, event_name, callback):
        self.handlers[event_name] = callback

    async def wait(self):
        return None

    async def receive(self, event_name, payload):
        """Deliver an event from the hub as the real client would."""
        return await self.handlers[event_name](payload)

    def emitted_named(self, event_name):
        return [payload for name, payload in self.emitted if name == event_name]


@pytest.fixture
def transport():
    return FakeTransport()
