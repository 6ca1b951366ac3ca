"""Domain events recorded by aggregates and drained by the caller.

Aggregates only record events; nothing is dispatched from inside the
domain.  The layer that persists an aggregate calls ``pull_domain_events``
after a successful save and hands the events to whatever publishes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable)."""

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)


class DomainEventMixin:
    """Event recording for aggregate roots.

    Must precede ``Entity`` in the bases so the event list exists before
    the aggregate's own constructor runs.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._domain_events: List[DomainEvent] = []

    def add_domain_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return the recorded events in order and forget them."""
        events, self._domain_events = self._domain_events, []
        return events

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._domain_events)
