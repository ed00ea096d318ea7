"""Read-only projection of a linked list into display records."""

import logging
from dataclasses import dataclass
from typing import Any

from linkviz.errors import InconsistentListError
from linkviz.linkedlist import LinkedList
from linkviz.types import Variant

log = logging.getLogger(__name__)


def node_id(list_id: str, index: int) -> str:
    """Return the display id of the node at ``index`` in list ``list_id``."""
    return f"{list_id}_node_{index}"


@dataclass(frozen=True)
class NodeRecord:
    """One node as rendered by the visualizer."""

    id: str
    value: int
    next_id: str | None = None
    prev_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form; absent links are omitted."""
        data: dict[str, Any] = {"id": self.id, "value": self.value}
        if self.next_id is not None:
            data["nextId"] = self.next_id
        if self.prev_id is not None:
            data["prevId"] = self.prev_id
        return data


@dataclass(frozen=True)
class ListSnapshot:
    """Point-in-time view of a list: its metadata plus projected nodes."""

    id: str
    name: str
    variant: Variant
    size: int
    nodes: tuple[NodeRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form, with the variant under "type"."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.variant.value,
            "size": self.size,
            "nodes": [record.to_dict() for record in self.nodes],
        }


def _inconsistent(lst: LinkedList, problem: str) -> InconsistentListError:
    log.error("Cannot project list %s: %s", lst.id, problem)
    return InconsistentListError(f"List {lst.id!r}: {problem}")


def project(lst: LinkedList) -> list[NodeRecord]:
    """
    Walk ``lst`` from head and emit one record per node.

    The walk is bounded by ``lst.size``. For circular lists the last record
    links back to the first. A chain that ends, closes or keeps going at a
    position that disagrees with ``size`` raises InconsistentListError
    instead of producing a truncated view.

    Args:
        lst: The list to project; it is not modified

    Returns:
        Records in traversal order

    Raises:
        InconsistentListError: If the node graph disagrees with size
    """
    size = lst.size
    head = lst.head
    circular = lst.variant is Variant.CIRCULAR
    double = lst.variant is Variant.DOUBLE

    records: list[NodeRecord] = []
    previous = None
    current = head
    for index in range(size):
        if current is None:
            raise _inconsistent(lst, f"chain ends after {index} nodes, size is {size}")

        succ = current.next
        if index == size - 1:
            expected = head if circular else None
            if succ is not expected:
                raise _inconsistent(lst, f"chain does not end at index {index}, size is {size}")
            next_id = node_id(lst.id, 0) if circular else None
        else:
            if succ is None or succ is head:
                raise _inconsistent(lst, f"chain closes after {index + 1} nodes, size is {size}")
            next_id = node_id(lst.id, index + 1)

        prev_id = None
        if double:
            if current.prev is not previous:
                raise _inconsistent(lst, f"node at index {index} has a stale prev link")
            if index > 0:
                prev_id = node_id(lst.id, index - 1)

        records.append(NodeRecord(node_id(lst.id, index), current.value, next_id, prev_id))
        previous = current
        current = succ

    return records


def snapshot(lst: LinkedList) -> ListSnapshot:
    """Return a ListSnapshot of ``lst`` with freshly projected nodes."""
    return ListSnapshot(
        id=lst.id,
        name=lst.name,
        variant=lst.variant,
        size=lst.size,
        nodes=tuple(project(lst)),
    )
