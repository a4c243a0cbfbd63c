"""Ambient color-scheme preference as an explicit signal.

The environment (a browser's `prefers-color-scheme` media query, relayed by
the UI) publishes into a ColorSchemeSignal. The composition root binds the
signal to the store once; the store never reads environment globals.
"""
import logging
import threading
from typing import Callable, List

log = logging.getLogger("companion.settings")


class ColorSchemeSignal:
    """Last known dark-scheme preference plus change subscribers."""

    def __init__(self, prefers_dark: bool = False):
        self._prefers_dark = bool(prefers_dark)
        self._subscribers: List[Callable[[bool], None]] = []
        self._lock = threading.Lock()

    @property
    def prefers_dark(self) -> bool:
        return self._prefers_dark

    def subscribe(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, prefers_dark: bool) -> bool:
        """Record a new preference. Subscribers hear only actual changes."""
        prefers_dark = bool(prefers_dark)
        with self._lock:
            if prefers_dark == self._prefers_dark:
                return False
            self._prefers_dark = prefers_dark
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(prefers_dark)
            except Exception:
                log.exception("Color scheme subscriber %r failed", callback)
        return True


def bind_dark_mode(signal: ColorSchemeSignal, store) -> Callable[[], None]:
    """Apply the current preference to the store and follow every change."""
    store.set_dark_mode(signal.prefers_dark)
    return signal.subscribe(store.set_dark_mode)
