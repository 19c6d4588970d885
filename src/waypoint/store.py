"""In-memory, index-addressed item store for handlers.

Handlers run concurrently (tasks on one loop, or worker threads), so the
shared list lives behind a mutex instead of being a bare module global::

    items: ListStore[dict] = ListStore()

    @app.post("/items")
    async def add_item(request, params):
        items.append(await request.json())
        return "OK"
"""

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class ListStore(Generic[T]):
    """Append-only list guarded by a ``threading.Lock``.

    Items are addressed by their zero-based insertion index. ``get`` accepts
    the raw path parameter string, so handlers can pass ``params["id"]``
    straight through.
    """

    __slots__ = ("_items", "_lock")

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def append(self, item: T) -> int:
        """Store *item* and return its index."""
        with self._lock:
            self._items.append(item)
            return len(self._items) - 1

    def get(self, index: int | str) -> T | None:
        """Return the item at *index*, or ``None`` if absent or not numeric."""
        if isinstance(index, str):
            # ASCII only: isdigit alone admits superscripts such as '²'
            if not (index.isascii() and index.isdigit()):
                return None
            index = int(index)
        with self._lock:
            if 0 <= index < len(self._items):
                return self._items[index]
        return None

    def all(self) -> list[T]:
        """Snapshot copy of every stored item, in insertion order."""
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
