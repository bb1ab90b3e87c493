"""In-process dispatcher for roadmap domain events.

Design goals
------------
1.  **Type-routed dispatching**: handlers register for a ``DomainEvent``
    class.  An event is delivered to the handlers of every class in its
    MRO, so a handler registered for ``DomainEvent`` sees every event.
2.  **Sync or async handlers**: a handler may return an awaitable, which
    is awaited before the next handler runs.
3.  **Failure isolation**: a failing handler is logged, counted and
    recorded as a dead letter; the remaining handlers still run and the
    caller never sees the exception.
4.  **Injected, not global**: each application owns one dispatcher;
    ``clear_handlers()`` resets it between tests.
"""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol, runtime_checkable

from roadmap_planning.domain.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None] | None]


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventDispatcher(Protocol):
    """Event sink used by the command services."""

    def register(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None: ...

    async def dispatch(self, event: DomainEvent) -> None: ...

    async def dispatch_all(self, events: Iterable[DomainEvent]) -> None: ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------

class EventDispatcher:
    """Deterministic, in-process dispatcher.

    Handlers run sequentially in registration order, most specific event
    class first.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(
            list
        )
        self._history: list[DomainEvent] = []
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[tuple[DomainEvent, str]] = []
        self._messages_processed: int = 0

    # -- Registration ------------------------------------------------------

    def register(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """Register *handler* for *event_type* and its subclasses."""
        self._handlers[event_type].append(handler)

    def clear_handlers(self) -> None:
        self._handlers.clear()

    def handler_count(self, event_type: type[DomainEvent] | None = None) -> int:
        if event_type is None:
            return sum(len(h) for h in self._handlers.values())
        return len(self._handlers.get(event_type, []))

    # -- Core API ----------------------------------------------------------

    async def dispatch(self, event: DomainEvent) -> None:
        """Deliver *event* to every matching handler."""
        self._history.append(event)
        key = type(event).__name__

        for handler in self._matching_handlers(event):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
                self._messages_processed += 1
            except Exception as exc:
                self._error_counts[key] += 1
                self._dead_letters.append((event, str(exc)))
                logger.exception("Handler error on %s: %s", key, exc)

    async def dispatch_all(self, events: Iterable[DomainEvent]) -> None:
        """Dispatch *events* one after another, in order."""
        for event in events:
            await self.dispatch(event)

    def _matching_handlers(self, event: DomainEvent) -> list[EventHandler]:
        handlers: list[EventHandler] = []
        for cls in type(event).__mro__:
            handlers.extend(self._handlers.get(cls, ()))
        return handlers

    # -- Observability -----------------------------------------------------

    def get_history(
        self,
        event_type: type[DomainEvent] | None = None,
    ) -> list[DomainEvent]:
        """Return dispatched events, optionally filtered by exact type."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if type(e) is event_type]

    def clear_history(self) -> None:
        self._history.clear()

    def get_error_counts(self) -> dict[str, int]:
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[tuple[DomainEvent, str]]:
        return list(self._dead_letters)

    def clear_dead_letters(self) -> list[tuple[DomainEvent, str]]:
        """Drain and return dead letters."""
        drained = self._dead_letters[:]
        self._dead_letters.clear()
        return drained

    @property
    def messages_processed(self) -> int:
        return self._messages_processed
