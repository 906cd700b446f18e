"""Boundary — connects one chat platform to the hub.

The boundary owns:
- the introduction handshake (signed identity sent on every connect)
- a local event list: ``on(event, callback)`` / ``trigger(event, payload)``
- emit helpers for events travelling platform → hub
- handler registration for events travelling hub → platform; text-bearing
  events are rendered through the inline-command engine before the
  platform reply function sees them
- the ask_resource / reply_resource responder
"""

import asyncio
import inspect
import logging
import sys
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from .errors import MissingRequiredDataError, UnknownEventError
from .inline.engine import InlineCommandEngine
from .inline.registry import Companion, CommandRegistry, maybe_await
from .signing import sign_payload
from .transport import Transport

logger = logging.getLogger("kozz_boundary.boundary")

# Events a boundary callback can be registered for
BOUNDARY_EVENTS = frozenset({
    "message",
    "user_left_group",
    "user_joined_group",
    "connect",
    "reply_with_text",
    "reply_with_media",
    "reply_with_sticker",
    "send_message",
    "send_message_with_media",
    "send_message_with_sticker",
    "react_message",
    "delete_message",
})

# (payload, companion, rendered text) -> anything; may be async
ReplyFn = Callable[[dict, Companion, str], Any]
# (payload) -> anything; may be async
PayloadFn = Callable[[dict], Any]
# (request data) -> resource value; may be async
ResourceGetter = Callable[[Any], Union[Any, Awaitable[Any]]]


@dataclass
class _Event:
    name: str
    callback: Callable[[Any], Any]


class Boundary:
    """Adapter between a chat platform and the hub."""

    def __init__(
        self,
        transport: Transport,
        platform: str,
        name: str,
        registry: Optional[CommandRegistry] = None,
        signing_secret: Optional[str] = None,
    ):
        self.transport = transport
        self.platform = platform
        self.name = name
        self.engine = InlineCommandEngine(registry)
        self._signing_secret = signing_secret
        self._events: list[_Event] = []
        self._resources: dict[str, ResourceGetter] = {}
        self._background: set[asyncio.Task] = set()
        self._wired = False

    # ── Lifecycle ──────────────────────────────────────────────

    async def start(self, url: str, socket_path: str = "/socket.io/"):
        """Wire hub-side handlers and connect."""
        self._wire()
        await self.transport.connect(url, socket_path)

    async def stop(self):
        await self.transport.disconnect()
        for task in list(self._background):
            task.cancel()

    def _wire(self):
        if self._wired:
            return
        self.transport.on("connect", self._on_connect)
        self.transport.on("ask_resource", self._on_ask_resource)
        self._wired = True

    def introduction_payload(self) -> dict[str, Any]:
        """Identity payload sent to the hub, before signing."""
        return {
            "OS": sys.platform,
            "platform": self.platform,
            "role": "boundary",
            "name": self.name,
        }

    async def _on_connect(self):
        payload = self.introduction_payload()
        await self.transport.emit("introduction", sign_payload(payload, self._signing_secret))
        logger.info(f"Introduced to hub as '{self.name}' ({self.platform}).")
        self.trigger("connect", payload)

    # ── Local event list ───────────────────────────────────────

    def on(self, event_name: str, callback: Callable[[Any], Any]):
        """Register a callback fired whenever ``event_name`` happens locally.

        Callbacks run in registration order. A callback that returns an
        awaitable has it scheduled as a task.

        Raises:
            UnknownEventError: If the boundary never fires ``event_name``.
        """
        if event_name not in BOUNDARY_EVENTS:
            raise UnknownEventError(event_name)
        self._events.append(_Event(event_name, callback))

    def trigger(self, event_name: str, payload: Any):
        """Fan ``payload`` out to every callback registered for ``event_name``."""
        for event in self._events:
            if event.name != event_name:
                continue
            result = event.callback(payload)
            if inspect.isawaitable(result):
                self._schedule(event_name, result)

    def _schedule(self, event_name: str, awaitable: Awaitable):
        task = asyncio.ensure_future(awaitable)
        self._background.add(task)

        def _done(t: asyncio.Task):
            self._background.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                logger.error(
                    f"Callback for '{event_name}' failed: {exc}",
                    exc_info=(type(exc), exc, exc.__traceback__),
                )

        task.add_done_callback(_done)

    # ── Platform → hub ─────────────────────────────────────────

    async def emit_forwardable_event(self, event_name: str, payload: Any):
        await self.transport.emit(event_name, payload)

    async def emit_message(self, payload: dict):
        await self.transport.emit("message", payload)
        self.trigger("message", payload)

    async def emit_user_joined_group(self, payload: dict):
        await self.transport.emit("forward_event", {
            "eventName": "user_joined_group",
            "payload": payload,
        })
        self.trigger("user_joined_group", payload)

    async def emit_user_left_group(self, payload: dict):
        await self.transport.emit("forward_event", {
            "eventName": "user_left_group",
            "payload": payload,
        })
        self.trigger("user_left_group", payload)

    # ── Hub → platform ─────────────────────────────────────────

    def handle_reply_with_text(self, reply_fn: ReplyFn):
        self._register_rendered("reply_with_text", reply_fn)

    def handle_reply_with_sticker(self, reply_fn: ReplyFn):
        self._register_rendered("reply_with_sticker", reply_fn, requires_media=True)

    def handle_reply_with_media(self, reply_fn: ReplyFn):
        self._register_rendered("reply_with_media", reply_fn, requires_media=True)

    def handle_send_message(self, reply_fn: ReplyFn):
        self._register_rendered("send_message", reply_fn)

    def handle_send_message_with_sticker(self, reply_fn: ReplyFn):
        self._register_rendered("send_message_with_sticker", reply_fn, requires_media=True)

    def handle_send_message_with_media(self, send_fn: PayloadFn):
        self._register_passthrough("send_message_with_media", send_fn, requires_media=True)

    def handle_react_message(self, react_fn: PayloadFn):
        self._register_passthrough("react_message", react_fn)

    def handle_delete_message(self, delete_fn: PayloadFn):
        self._register_passthrough("delete_message", delete_fn)

    async def render(self, payload: dict):
        """Render a payload's body. Returns (companion, rendered text)."""
        return await self.engine.render(payload.get("body") or "", payload)

    def _register_rendered(self, event_name: str, reply_fn: ReplyFn, requires_media: bool = False):
        async def _handler(payload: dict):
            if requires_media:
                _require_media(event_name, payload)

            companion, rendered = await self.render(payload)
            self.trigger(event_name, payload)
            return await maybe_await(reply_fn(payload, companion, rendered))

        self.transport.on(event_name, _handler)

    def _register_passthrough(self, event_name: str, fn: PayloadFn, requires_media: bool = False):
        async def _handler(payload: dict):
            if requires_media:
                _require_media(event_name, payload)

            self.trigger(event_name, payload)
            return await maybe_await(fn(payload))

        self.transport.on(event_name, _handler)

    # ── Resources ──────────────────────────────────────────────

    def on_ask_resource(self, resource_name: str, getter: ResourceGetter):
        """Answer hub requests for ``resource_name`` with ``getter(data)``."""
        self._resources[resource_name] = getter

    async def gather_resource(self, resource_name: str, data: Any) -> Any:
        getter = self._resources.get(resource_name)
        if getter is None:
            logger.debug(f"No getter for resource '{resource_name}'")
            return None
        return await maybe_await(getter(data))

    async def _on_ask_resource(self, payload: dict):
        request = payload.get("request") or {}
        response = await self.gather_resource(request.get("resource"), request.get("data"))

        await self.transport.emit("reply_resource", {
            **payload,
            "response": response,
            "timestamp": int(time.time() * 1000),
        })


def _require_media(event_name: str, payload: dict):
    if not payload.get("media"):
        logger.error(f"Evoked {event_name} with payload without media")
        raise MissingRequiredDataError(event_name, "media")
