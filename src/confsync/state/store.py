"""Synchronous in-memory store.

The store owns the state tree and is the only component that replaces it.
Everything else reads snapshots through :meth:`Store.get_state` and requests
changes through :meth:`Store.dispatch`.

Dispatch is re-entrant and depth-first: an event dispatched from inside a
middleware runs to completion, including its own middleware pass, before the
outer call continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from confsync._redact import redact_for_log
from confsync.config import SyncConfig
from confsync.exceptions import ConfsyncDispatchLoopError
from confsync.models.state import AppState
from confsync.state.events import BaseEvent
from confsync.state.reducers import reduce

_logger = logging.getLogger(__name__)

Dispatch = Callable[[BaseEvent], Any]
Reducer = Callable[[AppState, BaseEvent], AppState]
Listener = Callable[[], None]


class StoreHandle(Protocol):
    """What a middleware gets to see of the store."""

    @property
    def config(self) -> SyncConfig: ...

    def get_state(self) -> AppState: ...

    def dispatch(self, event: BaseEvent) -> Any: ...


Middleware = Callable[[StoreHandle], Callable[[Dispatch], Dispatch]]


class Store:
    """Single owner of the application state.

    Middleware are applied in order: the first one listed sees each event
    first and wraps all the others.
    """

    def __init__(
        self,
        *,
        initial_state: AppState | None = None,
        middleware: Sequence[Middleware] = (),
        reducer: Reducer = reduce,
        config: SyncConfig | None = None,
    ) -> None:
        self._state = initial_state if initial_state is not None else AppState()
        self._reducer = reducer
        self._config = config or SyncConfig()
        self._listeners: list[Listener] = []
        self._depth = 0

        chain: Dispatch = self._base_dispatch
        for factory in reversed(middleware):
            chain = factory(self)(chain)
        self._chain = chain

    @property
    def config(self) -> SyncConfig:
        return self._config

    def get_state(self) -> AppState:
        """Return the current snapshot."""
        return self._state

    def dispatch(self, event: BaseEvent) -> Any:
        """Send *event* through the middleware chain and the reducer.

        Returns whatever the outermost middleware returns; with the default
        middleware that is the event itself.
        """
        if self._depth >= self._config.max_dispatch_depth:
            raise ConfsyncDispatchLoopError(
                f"Dispatch depth {self._depth + 1} exceeds maximum {self._config.max_dispatch_depth}",
                kind=event.kind,
                depth=self._depth + 1,
            )
        self._depth += 1
        try:
            return self._chain(event)
        finally:
            self._depth -= 1

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _base_dispatch(self, event: BaseEvent) -> BaseEvent:
        if self._config.trace_dispatch:
            _logger.debug("Dispatch depth=%d event=%s", self._depth, redact_for_log(event))

        new_state = self._reducer(self._state, event)
        if new_state is self._state:
            return event

        self._state = new_state
        for listener in list(self._listeners):
            listener()
        return event
