"""Synchronous observable primitives.

Every notification is delivered before the mutating call returns. Listeners
are invoked over a snapshot of the listener list, so a listener may remove
itself (or others) while being notified.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, List, Optional, Sequence, TypeVar

from pygame.math import Vector2

T = TypeVar("T")

Listener = Callable[..., None]


class Emitter:
    """Ordered list of callbacks fired by :meth:`emit`."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            raise ValueError("listener is not registered") from None

    def has_listener(self, listener: Listener) -> bool:
        return listener in self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(*args)

    def dispose(self) -> None:
        self._listeners.clear()


def _values_equal(first: Any, second: Any) -> bool:
    # pygame's Vector2 equality uses an epsilon; compare coordinates exactly instead.
    if isinstance(first, Vector2) and isinstance(second, Vector2):
        return first.x == second.x and first.y == second.y
    return first is second or first == second


class Property(Generic[T]):
    """A value that notifies ``(new, old)`` listeners when it changes."""

    def __init__(self, value: T, *, validator: Optional[Callable[[T], bool]] = None) -> None:
        self._validator = validator
        self._check(value)
        self._initial_value = value
        self._value = value
        self._changed = Emitter()

    def _check(self, value: T) -> None:
        if self._validator is not None and not self._validator(value):
            raise ValueError(f"invalid value: {value!r}")

    @property
    def initial_value(self) -> T:
        return self._initial_value

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._set(new_value)

    def _set(self, new_value: T) -> None:
        self._check(new_value)
        if _values_equal(new_value, self._value):
            return
        old_value = self._value
        self._value = new_value
        self._changed.emit(new_value, old_value)

    def link(self, listener: Listener) -> None:
        """Subscribe and immediately call ``listener(value, None)``."""
        self._changed.add_listener(listener)
        listener(self._value, None)

    def lazy_link(self, listener: Listener) -> None:
        self._changed.add_listener(listener)

    def unlink(self, listener: Listener) -> None:
        self._changed.remove_listener(listener)

    def has_listener(self, listener: Listener) -> bool:
        return self._changed.has_listener(listener)

    @property
    def listener_count(self) -> int:
        return self._changed.listener_count

    def reset(self) -> None:
        self.value = self._initial_value

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"{type(self).__name__}({self._value!r})"


class DerivedProperty(Property[T]):
    """Read-only property recomputed whenever one of its dependencies changes."""

    def __init__(self, dependencies: Sequence[Property[Any]], derive: Callable[..., T]) -> None:
        self._dependencies = list(dependencies)
        self._derive = derive
        super().__init__(self._compute())
        for dependency in self._dependencies:
            dependency.lazy_link(self._on_dependency_changed)

    def _compute(self) -> T:
        return self._derive(*(dependency.value for dependency in self._dependencies))

    def _on_dependency_changed(self, *_: Any) -> None:
        self._set(self._compute())

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        raise AttributeError("DerivedProperty is read-only")

    def reset(self) -> None:
        raise AttributeError("DerivedProperty cannot be reset")

    def dispose(self) -> None:
        for dependency in self._dependencies:
            dependency.unlink(self._on_dependency_changed)
        self._dependencies = []


class ObservableList(Generic[T]):
    """Ordered list that announces additions and removals."""

    def __init__(self, items: Sequence[T] = ()) -> None:
        self._items: List[T] = list(items)
        self.item_added = Emitter()
        self.item_removed = Emitter()
        self.length_property: Property[int] = Property(len(self._items))

    def append(self, item: T) -> None:
        self._items.append(item)
        self.item_added.emit(item)
        self.length_property.value = len(self._items)

    def remove(self, item: T) -> None:
        self._items.remove(item)
        self.item_removed.emit(item)
        self.length_property.value = len(self._items)

    def clear(self) -> None:
        while self._items:
            self.remove(self._items[-1])

    def index(self, item: T) -> int:
        return self._items.index(item)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"ObservableList({self._items!r})"


__all__ = ["DerivedProperty", "Emitter", "ObservableList", "Property"]
