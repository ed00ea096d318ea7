"""Variant-tagged linked list engine over an explicit node graph."""

import logging
from collections.abc import Iterator

from linkviz.errors import InconsistentListError, InvalidIndexError, ValueNotFoundError
from linkviz.types import Variant, VariantName

log = logging.getLogger(__name__)


class Node:
    """A node in a linked list."""

    __slots__ = ("value", "next", "prev")

    def __init__(self, value: int) -> None:
        self.value = value
        self.next: Node | None = None
        self.prev: Node | None = None

    def unlink(self) -> None:
        """Clear both relations so no stale back-reference survives removal."""
        self.next = None
        self.prev = None

    def __repr__(self) -> str:
        return f"<Node value={self.value}>"


def _expect(node: Node | None, list_id: str, what: str) -> Node:
    if node is None:
        log.error("List %s is inconsistent: missing %s", list_id, what)
        raise InconsistentListError(f"List {list_id!r} is missing {what}")
    return node


class LinkedList:
    """
    Named linked list in one of three variants: single, double or circular.

    The variant is fixed at construction and every operation branches on it.
    ``size`` is authoritative: all traversals are bounded by it, so a circular
    chain never needs a sentinel to terminate.
    """

    def __init__(
        self,
        list_id: str,
        name: str,
        variant: Variant | VariantName = Variant.SINGLE,
    ) -> None:
        self.id = list_id
        self.name = name
        self.variant = Variant.parse(variant)
        self._head: Node | None = None
        self._tail: Node | None = None
        self._size = 0

    @property
    def head(self) -> Node | None:
        return self._head

    @property
    def tail(self) -> Node | None:
        return self._tail

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        """Return the number of nodes in the list."""
        return self._size

    def __bool__(self) -> bool:
        """Return True if the list is non-empty."""
        return self._size > 0

    def __iter__(self) -> Iterator[int]:
        """Yield node values from head, stopping after ``size`` nodes."""
        current = self._head
        for index in range(self._size):
            node = _expect(current, self.id, f"node at index {index}")
            yield node.value
            current = node.next

    def __repr__(self) -> str:
        return f"<LinkedList id={self.id!r} variant={self.variant.value} size={self._size}>"

    def values(self) -> list[int]:
        """Return the node values in traversal order."""
        return list(self)

    def _anchors(self) -> tuple[Node, Node]:
        return _expect(self._head, self.id, "head"), _expect(self._tail, self.id, "tail")

    def _walk(self, steps: int) -> Node:
        """Return the node ``steps`` hops after head."""
        node = _expect(self._head, self.id, "head")
        for index in range(1, steps + 1):
            node = _expect(node.next, self.id, f"node at index {index}")
        return node

    def _index_of(self, value: int) -> int:
        current = self._head
        for index in range(self._size):
            node = _expect(current, self.id, f"node at index {index}")
            if node.value == value:
                return index
            current = node.next
        raise ValueNotFoundError(value)

    def insert_at(self, index: int, value: int) -> None:
        """
        Insert a new node holding ``value`` so that it ends up at ``index``.

        Args:
            index: Target position, 0 <= index <= size
            value: Value for the new node

        Raises:
            InvalidIndexError: If index is outside [0, size]
        """
        if index < 0 or index > self._size:
            raise InvalidIndexError(index, self._size)

        node = Node(value)
        variant = self.variant

        if self._size == 0:
            self._head = self._tail = node
            if variant is Variant.CIRCULAR:
                node.next = node
        elif index == 0:
            head, tail = self._anchors()
            node.next = head
            if variant is Variant.DOUBLE:
                head.prev = node
            elif variant is Variant.CIRCULAR:
                tail.next = node
            self._head = node
        elif index == self._size:
            head, tail = self._anchors()
            tail.next = node
            if variant is Variant.DOUBLE:
                node.prev = tail
            elif variant is Variant.CIRCULAR:
                node.next = head
            self._tail = node
        else:
            prev = self._walk(index - 1)
            succ = _expect(prev.next, self.id, f"node at index {index}")
            node.next = succ
            prev.next = node
            if variant is Variant.DOUBLE:
                node.prev = prev
                succ.prev = node

        self._size += 1

    def prepend(self, value: int) -> None:
        """Insert ``value`` at the head."""
        self.insert_at(0, value)

    def append(self, value: int) -> None:
        """Insert ``value`` after the tail."""
        self.insert_at(self._size, value)

    def delete_at(self, index: int) -> int:
        """
        Remove the node at ``index``.

        Args:
            index: Position to remove, 0 <= index < size

        Returns:
            The removed node's value

        Raises:
            InvalidIndexError: If index is outside [0, size), including any
                index on an empty list
        """
        if index < 0 or index >= self._size:
            raise InvalidIndexError(index, self._size)

        head, tail = self._anchors()
        variant = self.variant

        if self._size == 1:
            removed = head
            self._head = self._tail = None
        elif index == 0:
            removed = head
            new_head = _expect(head.next, self.id, "node at index 1")
            if variant is Variant.DOUBLE:
                new_head.prev = None
            elif variant is Variant.CIRCULAR:
                tail.next = new_head
            self._head = new_head
        elif index == self._size - 1:
            removed = tail
            if variant is Variant.DOUBLE:
                prev = _expect(tail.prev, self.id, f"prev of node at index {index}")
            else:
                # No back-link: find the predecessor from head
                prev = self._walk(index - 1)
            prev.next = head if variant is Variant.CIRCULAR else None
            self._tail = prev
        elif variant is Variant.DOUBLE:
            removed = self._walk(index)
            prev = _expect(removed.prev, self.id, f"prev of node at index {index}")
            succ = _expect(removed.next, self.id, f"node at index {index + 1}")
            prev.next = succ
            succ.prev = prev
        else:
            prev = self._walk(index - 1)
            removed = _expect(prev.next, self.id, f"node at index {index}")
            prev.next = removed.next

        value = removed.value
        removed.unlink()
        self._size -= 1
        return value

    def delete_by_value(self, value: int) -> int:
        """
        Remove the first node holding ``value``.

        Returns:
            The index the node occupied

        Raises:
            ValueNotFoundError: If no node holds value
        """
        index = self._index_of(value)
        self.delete_at(index)
        return index

    def find_by_value(self, value: int) -> int:
        """Return the index of the first node holding ``value``, or raise ValueNotFoundError."""
        return self._index_of(value)

    def update_at(self, index: int, value: int) -> int:
        """Replace the value at ``index`` in place and return the previous value."""
        if index < 0 or index >= self._size:
            raise InvalidIndexError(index, self._size)
        node = self._walk(index)
        old_value = node.value
        node.value = value
        return old_value

    def check_invariants(self) -> None:
        """
        Verify the node graph against ``size`` and the variant's link rules.

        Raises:
            InconsistentListError: Describing the first violation found
        """
        problem = self._find_violation()
        if problem is not None:
            log.error("List %s is inconsistent: %s", self.id, problem)
            raise InconsistentListError(f"List {self.id!r}: {problem}")

    def _find_violation(self) -> str | None:
        if self._size < 0:
            return f"negative size {self._size}"
        if self._size == 0:
            if self._head is not None or self._tail is not None:
                return "empty list still has a head or tail"
            return None
        if self._head is None or self._tail is None:
            return f"size is {self._size} but head or tail is missing"

        variant = self.variant
        node = self._head
        if node.prev is not None:
            return "head has a prev link"

        for index in range(self._size - 1):
            succ = node.next
            if succ is None:
                return f"chain ends after {index + 1} nodes, size is {self._size}"
            if succ is self._head:
                return f"chain returns to head after {index + 1} nodes, size is {self._size}"
            if variant is Variant.DOUBLE:
                if succ.prev is not node:
                    return f"node at index {index + 1} has a stale prev link"
            elif succ.prev is not None:
                return f"node at index {index + 1} has a prev link in a {variant.value} list"
            node = succ

        if node is not self._tail:
            return f"node at index {self._size - 1} is not the tail"
        expected = self._head if variant is Variant.CIRCULAR else None
        if node.next is not expected:
            return "tail does not close the cycle" if expected else "tail has a next link"
        return None
