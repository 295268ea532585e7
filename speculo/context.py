"""Execution context passed to message handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Event:
    """A typed event with string attributes, emitted by a handler."""

    kind: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class Context:
    """Block time, collected events and a logger for one execution."""

    block_time: int = 0
    events: list[Event] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("speculo"))

    def emit_event(self, kind: str, attributes: Mapping[str, str]) -> Event:
        """Record an event and return it."""
        event = Event(kind, {str(k): str(v) for k, v in attributes.items()})
        self.events.append(event)
        return event