"""
Debounced, cancellable match triggering for one text surface.

A TriggerController owns at most one live debounce timer. Every edit or cursor
move calls schedule_match(), which cancels the previous timer and starts a new
one; when a timer finally fires, the fragment and matches are recomputed from
the *current* buffer and cursor (through ``read_state`` when the host provides
it) and handed to the ``on_resolved`` callback.

State machine::

    IDLE --schedule--> PENDING --fire/match--> RESOLVED --schedule--> PENDING
                          |                        |
                          +--fire/no match--> IDLE <--dismiss/blur/disable--+

Timers come from a Scheduler so the same controller runs under a GUI event
loop (TkScheduler), a plain thread timer (ThreadingScheduler) or a fake clock
in tests.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from functools import partial
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence, Tuple

from . import config as CFG
from .fragment import locate_fragment
from .models import Keyword, MatchResult
from .search import find_matches

log = logging.getLogger(__name__)

OnResolved = Callable[[Optional[MatchResult]], None]
ReadState = Callable[[], Tuple[str, int]]


class Scheduler(Protocol):
    def call_later(self, delay: float, fn: Callable[[], None]) -> Any: ...
    def cancel(self, handle: Any) -> None: ...


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads."""

    def call_later(self, delay: float, fn: Callable[[], None]) -> threading.Timer:
        t = threading.Timer(delay, fn)
        t.daemon = True
        t.start()
        return t

    def cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


class TkScheduler:
    """Schedules on a Tk widget's event loop via after()/after_cancel()."""

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def call_later(self, delay: float, fn: Callable[[], None]) -> str:
        return self._widget.after(int(delay * 1000), fn)

    def cancel(self, handle: str) -> None:
        self._widget.after_cancel(handle)


class TriggerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVED = "resolved"


class TriggerController:
    """
    Debounce wrapper around locate_fragment() + find_matches().

    One instance per editable surface. ``schedule_match`` and
    ``cancel_scheduled`` are the only ways timers are created or removed.
    """

    def __init__(
        self,
        keywords: Iterable[Keyword] = (),
        *,
        delay_ms: int = CFG.DEBOUNCE_MS,
        scheduler: Optional[Scheduler] = None,
        read_state: Optional[ReadState] = None,
        on_resolved: Optional[OnResolved] = None,
    ) -> None:
        self.keywords: Sequence[Keyword] = tuple(keywords)
        self.delay_ms = int(delay_ms)
        self._scheduler: Scheduler = scheduler or ThreadingScheduler()
        self._read_state = read_state
        self._on_resolved = on_resolved

        # a timer thread may fire while the host thread reschedules
        self._lock = threading.RLock()
        self._handle: Any = None
        self._generation = 0
        self._latest: Optional[Tuple[str, int, Sequence[Keyword], Optional[OnResolved]]] = None

        self.enabled = True
        self.state = TriggerState.IDLE
        self.result: Optional[MatchResult] = None
        self.dropdown_open = False
        self.selected_index = 0

    # ------------- scheduling -------------

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule_match(
        self,
        buffer: str,
        cursor: int,
        keywords: Optional[Iterable[Keyword]] = None,
        on_resolved: Optional[OnResolved] = None,
    ) -> None:
        """Restart the debounce timer for the given buffer state."""
        callback = on_resolved or self._on_resolved
        with self._lock:
            if not self.enabled:
                self._cancel_timer()
                self._reset()
                disabled = True
            else:
                disabled = False
                kws = tuple(keywords) if keywords is not None else self.keywords
                self._cancel_timer()
                self._generation += 1
                self._latest = (buffer, cursor, kws, callback)
                self.state = TriggerState.PENDING
                self._handle = self._scheduler.call_later(
                    self.delay_ms / 1000.0, partial(self._fire, self._generation)
                )
                log.debug("scheduled match gen=%d cursor=%d", self._generation, cursor)
        if disabled and callback is not None:
            callback(None)

    def cancel_scheduled(self) -> None:
        """Drop the pending timer, if any; the last resolved result is kept."""
        with self._lock:
            self._cancel_timer()
            if self.state is TriggerState.PENDING:
                self.state = TriggerState.RESOLVED if self.result is not None else TriggerState.IDLE

    # ------------- host events -------------

    def disable(self) -> None:
        """Autocomplete switched off: clear everything and stay idle."""
        with self._lock:
            self.enabled = False
            self._cancel_timer()
            self._reset()

    def enable(self) -> None:
        with self._lock:
            self.enabled = True

    def blur(self) -> None:
        """Focus lost: same effect as disable() but the controller stays enabled."""
        with self._lock:
            self._cancel_timer()
            self._reset()

    def dismiss(self) -> None:
        """Escape: hide the suggestion without touching any pending timer."""
        with self._lock:
            self._reset(keep_pending=True)

    # ------------- dropdown navigation -------------

    def select_next(self) -> int:
        with self._lock:
            if self.dropdown_open and self.result is not None:
                self.selected_index = (self.selected_index + 1) % len(self.result.matches)
            return self.selected_index

    def select_previous(self) -> int:
        with self._lock:
            if self.dropdown_open and self.result is not None:
                n = len(self.result.matches)
                self.selected_index = (self.selected_index - 1 + n) % n
            return self.selected_index

    @property
    def selected_keyword(self) -> Optional[Keyword]:
        if self.result is None:
            return None
        if self.dropdown_open:
            return self.result.matches[self.selected_index]
        return self.result.best_match

    # ------------- internals -------------

    def _fire(self, generation: int) -> None:
        with self._lock:
            # a newer schedule/cancel superseded this timer
            if generation != self._generation or self._latest is None:
                return
            self._handle = None
            buffer, cursor, kws, callback = self._latest
            if self._read_state is not None:
                buffer, cursor = self._read_state()

            fragment = locate_fragment(buffer, cursor)
            result = find_matches(fragment, kws) if fragment is not None else None
            if result is None:
                self._reset()
            else:
                self.state = TriggerState.RESOLVED
                self.result = result
                self.selected_index = 0
                self.dropdown_open = len(result.matches) > 1
            log.debug("resolved gen=%d matches=%d", generation, len(result.matches) if result else 0)

        if callback is not None:
            callback(result)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None
        self._generation += 1

    def _reset(self, keep_pending: bool = False) -> None:
        self.result = None
        self.dropdown_open = False
        self.selected_index = 0
        if not (keep_pending and self.state is TriggerState.PENDING):
            self.state = TriggerState.IDLE
