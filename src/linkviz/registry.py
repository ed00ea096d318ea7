"""Registry of named linked lists with async, lock-guarded access."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from linkviz.errors import LinkVizError, ListNotFoundError
from linkviz.linkedlist import LinkedList
from linkviz.projection import ListSnapshot, NodeRecord, project, snapshot
from linkviz.types import Variant, VariantName

log = logging.getLogger(__name__)


class ListRegistry:
    """
    Owning store of linked lists keyed by id.

    The id space (create, delete, enumerate) is guarded by one registry
    lock; each list has its own lock held for the whole of every operation
    on it. The registry lock is never held while waiting for a list lock.
    """

    def __init__(
        self,
        *,
        id_factory: Callable[[], str] | None = None,
        default_variant: Variant | VariantName = Variant.SINGLE,
    ) -> None:
        """
        Initialize the registry.

        Args:
            id_factory: Returns a fresh, unique list id on each call.
                Defaults to a counter producing "list_1", "list_2", ...
            default_variant: Variant used when create_list() is given none.
        """
        self._lock = asyncio.Lock()
        self._lists: dict[str, LinkedList] = {}
        self._list_locks: dict[str, asyncio.Lock] = {}
        self._counter = 0
        self._id_factory = id_factory if id_factory is not None else self._next_id
        self._default_variant = Variant.parse(default_variant)

    async def __aenter__(self) -> "ListRegistry":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit. Drops every list."""
        await self.clear()

    def _next_id(self) -> str:
        self._counter += 1
        return f"list_{self._counter}"

    @asynccontextmanager
    async def _hold(self, list_id: str) -> AsyncIterator[LinkedList]:
        """Yield the list for ``list_id`` with its lock held."""
        async with self._lock:
            lst = self._lists.get(list_id)
            if lst is None:
                raise ListNotFoundError(list_id)
            lock = self._list_locks[list_id]

        async with lock:
            # Deleted while we waited for the lock
            if self._lists.get(list_id) is not lst:
                raise ListNotFoundError(list_id)
            yield lst

    async def create_list(
        self,
        name: str,
        variant: Variant | VariantName | None = None,
    ) -> ListSnapshot:
        """
        Create an empty list.

        Args:
            name: Display name
            variant: "single", "double" or "circular"; None or "" selects
                the registry's default variant

        Returns:
            Snapshot of the new, empty list

        Raises:
            InvalidVariantError: If variant is not recognised
        """
        parsed = Variant.parse(variant) if variant else self._default_variant
        async with self._lock:
            list_id = self._id_factory()
            if list_id in self._lists:
                raise LinkVizError(f"Id factory returned duplicate list id {list_id!r}")
            lst = LinkedList(list_id, name, parsed)
            self._lists[list_id] = lst
            self._list_locks[list_id] = asyncio.Lock()
            log.debug("Created %s list %s (%r)", parsed.value, list_id, name)
            return snapshot(lst)

    async def get_list(self, list_id: str) -> ListSnapshot:
        """Return a snapshot of the list, or raise ListNotFoundError."""
        async with self._hold(list_id) as lst:
            return snapshot(lst)

    async def delete_list(self, list_id: str) -> None:
        """
        Remove a list from the registry.

        Waits for any in-progress operation on the list to finish first.

        Raises:
            ListNotFoundError: If list_id is unknown
        """
        async with self._hold(list_id):
            async with self._lock:
                del self._lists[list_id]
                del self._list_locks[list_id]
        log.debug("Deleted list %s", list_id)

    async def list_all(self) -> list[ListSnapshot]:
        """Return snapshots of every list. Order is unspecified."""
        async with self._lock:
            entries = [(lst, self._list_locks[list_id]) for list_id, lst in self._lists.items()]

        snapshots = []
        for lst, lock in entries:
            async with lock:
                if self._lists.get(lst.id) is lst:
                    snapshots.append(snapshot(lst))
        return snapshots

    async def contains(self, list_id: str) -> bool:
        """Return True if ``list_id`` is registered."""
        async with self._lock:
            return list_id in self._lists

    async def count(self) -> int:
        """Return the number of registered lists."""
        async with self._lock:
            return len(self._lists)

    async def clear(self) -> None:
        """Drop every list. The id counter keeps counting."""
        async with self._lock:
            self._lists.clear()
            self._list_locks.clear()

    async def insert_at(self, list_id: str, index: int, value: int) -> ListSnapshot:
        """
        Insert ``value`` at ``index`` in the list.

        Raises:
            ListNotFoundError: If list_id is unknown
            InvalidIndexError: If index is outside [0, size]
        """
        async with self._hold(list_id) as lst:
            lst.insert_at(index, value)
            return snapshot(lst)

    async def prepend(self, list_id: str, value: int) -> ListSnapshot:
        """Insert ``value`` at the head of the list."""
        async with self._hold(list_id) as lst:
            lst.prepend(value)
            return snapshot(lst)

    async def append(self, list_id: str, value: int) -> ListSnapshot:
        """Insert ``value`` after the tail of the list."""
        async with self._hold(list_id) as lst:
            lst.append(value)
            return snapshot(lst)

    async def delete_at(self, list_id: str, index: int) -> tuple[ListSnapshot, int]:
        """
        Remove the node at ``index``.

        Returns:
            Tuple of (snapshot after removal, removed value)

        Raises:
            ListNotFoundError: If list_id is unknown
            InvalidIndexError: If index is outside [0, size)
        """
        async with self._hold(list_id) as lst:
            removed = lst.delete_at(index)
            return snapshot(lst), removed

    async def delete_by_value(self, list_id: str, value: int) -> tuple[ListSnapshot, int]:
        """
        Remove the first node holding ``value``.

        Returns:
            Tuple of (snapshot after removal, index the node occupied)

        Raises:
            ListNotFoundError: If list_id is unknown
            ValueNotFoundError: If no node holds value
        """
        async with self._hold(list_id) as lst:
            index = lst.delete_by_value(value)
            return snapshot(lst), index

    async def find_by_value(self, list_id: str, value: int) -> int:
        """Return the index of the first node holding ``value``."""
        async with self._hold(list_id) as lst:
            return lst.find_by_value(value)

    async def update_at(self, list_id: str, index: int, value: int) -> tuple[ListSnapshot, int]:
        """
        Replace the value at ``index``.

        Returns:
            Tuple of (snapshot after update, previous value)

        Raises:
            ListNotFoundError: If list_id is unknown
            InvalidIndexError: If index is outside [0, size)
        """
        async with self._hold(list_id) as lst:
            old_value = lst.update_at(index, value)
            return snapshot(lst), old_value

    async def project(self, list_id: str) -> list[NodeRecord]:
        """Return the display records of the list."""
        async with self._hold(list_id) as lst:
            return project(lst)
