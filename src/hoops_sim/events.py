from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

EventObserver = Callable[["PostseasonEvent"], None]


@dataclass(frozen=True, slots=True)
class PostseasonEvent:
    kind: str
    tier: int | None
    stage: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


class EventLog:
    """Ordered record of what happened during a postseason run.

    Events are kept in memory, handed to an optional observer as they occur and
    mirrored to the module logger at DEBUG level. Formatting is left to callers.
    """

    def __init__(self, observer: EventObserver | None = None) -> None:
        self._observer = observer
        self.events: list[PostseasonEvent] = []

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def emit(
        self,
        kind: str,
        message: str,
        *,
        tier: int | None = None,
        stage: str = "",
        **data: Any,
    ) -> PostseasonEvent:
        event = PostseasonEvent(kind=kind, tier=tier, stage=stage, message=message, data=dict(data))
        self.events.append(event)
        logger.debug("[T%s %s] %s", tier if tier is not None else "-", stage or kind, message)
        if self._observer is not None:
            self._observer(event)
        return event

    def of_kind(self, kind: str) -> list[PostseasonEvent]:
        return [event for event in self.events if event.kind == kind]


def ensure_log(events: EventLog | None) -> EventLog:
    return events if events is not None else EventLog()
