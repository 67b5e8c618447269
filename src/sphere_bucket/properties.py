# MIT License (see LICENSE)
"""
Observable values with explicit subscription handles.

A Property stores a single value and notifies listeners when it changes.
Every subscription returns a ListenerHandle, and unsubscribing requires
that handle, so owners can tear down exactly what they installed and
tests can assert that no listener outlives its owner.

Example:
    grabbed = Property(False)
    handle = grabbed.lazy_link(lambda new, old: print("grabbed" if new else "released"))
    grabbed.value = True    # prints "grabbed"
    grabbed.unlink(handle)
"""
from __future__ import annotations
from dataclasses import dataclass
from itertools import count
from typing import Callable, Generic, TypeVar

from .util import check

T = TypeVar("T")

Listener = Callable[[T, T], None]

_handle_ids = count(1)


@dataclass(frozen=True)
class ListenerHandle:
    """Token identifying one subscription on one Property."""
    id: int


class Property(Generic[T]):
    """
    A value that notifies listeners as listener(new_value, old_value).

    Listeners are only notified when the new value differs (!=) from the
    old one. A listener may unlink itself while being notified.
    """

    def __init__(self, value: T) -> None:
        self._initial_value = value
        self._value = value
        self._listeners: dict[ListenerHandle, Listener] = {}

    def __repr__(self) -> str:
        return f"Property({self._value!r})"

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    @property
    def initial_value(self) -> T:
        return self._initial_value

    def get(self) -> T:
        return self._value

    def set(self, new_value: T) -> None:
        """Store a new value and notify listeners if it changed."""
        old_value = self._value
        if new_value == old_value:
            return
        self._value = new_value
        # Snapshot so listeners can unlink (or link) during notification.
        for handle, listener in list(self._listeners.items()):
            if handle in self._listeners:
                listener(new_value, old_value)

    def reset(self) -> None:
        """Restore the value given at construction."""
        self.set(self._initial_value)

    def link(self, listener: Listener) -> ListenerHandle:
        """
        Subscribe and immediately notify with the current value.

        The first call receives (value, None).
        """
        handle = self.lazy_link(listener)
        listener(self._value, None)
        return handle

    def lazy_link(self, listener: Listener) -> ListenerHandle:
        """Subscribe to future changes only."""
        handle = ListenerHandle(next(_handle_ids))
        self._listeners[handle] = listener
        return handle

    def unlink(self, handle: ListenerHandle) -> None:
        """Remove the subscription identified by handle."""
        check(handle in self._listeners, f"no listener registered for {handle}")
        self._listeners.pop(handle, None)

    def has_listener(self, handle: ListenerHandle) -> bool:
        return handle in self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
