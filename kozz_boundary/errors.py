"""Boundary error types."""


class BoundaryError(Exception):
    """Base class for errors raised by the boundary."""


class MissingRequiredDataError(BoundaryError):
    """An event payload arrived without data its event requires.

    Fatal for that single event only. It is never retried.
    """

    def __init__(self, event_name: str, field: str = "media"):
        self.event_name = event_name
        self.field = field
        super().__init__(f"Evoked {event_name} with payload without {field}")


class UnknownEventError(BoundaryError, ValueError):
    """A callback was registered for an event the boundary never fires."""

    def __init__(self, event_name: str):
        self.event_name = event_name
        super().__init__(f"Unknown boundary event: {event_name!r}")
