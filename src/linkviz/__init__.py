"""linkviz - Linked list engine backing a data-structure visualizer."""

from linkviz.errors import (
    InconsistentListError,
    InvalidIndexError,
    InvalidVariantError,
    LinkVizError,
    ListNotFoundError,
    ValueNotFoundError,
)
from linkviz.linkedlist import LinkedList, Node
from linkviz.projection import ListSnapshot, NodeRecord, project, snapshot
from linkviz.registry import ListRegistry
from linkviz.types import Variant, VariantName

__version__ = "0.0.1"

__all__ = [
    "ListRegistry",
    "LinkedList",
    "Node",
    "NodeRecord",
    "ListSnapshot",
    "project",
    "snapshot",
    "Variant",
    "VariantName",
    "LinkVizError",
    "ListNotFoundError",
    "InvalidVariantError",
    "InvalidIndexError",
    "ValueNotFoundError",
    "InconsistentListError",
]
