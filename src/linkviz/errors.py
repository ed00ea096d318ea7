"""Exception classes for linkviz."""


class LinkVizError(Exception):
    """Base exception for all linkviz errors."""


class ListNotFoundError(LinkVizError):
    """Raised when a list id is not present in the registry."""

    def __init__(self, list_id: str) -> None:
        super().__init__(f"List {list_id!r} does not exist")
        self.list_id = list_id


class InvalidVariantError(LinkVizError):
    """Raised when a list variant is not one of 'single', 'double' or 'circular'."""

    def __init__(self, variant: object) -> None:
        super().__init__(
            f"List variant must be 'single', 'double' or 'circular', got {variant!r}"
        )
        self.variant = variant


class InvalidIndexError(LinkVizError):
    """Raised when an index falls outside the valid range for an operation."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} is out of range for list of size {size}")
        self.index = index
        self.size = size


class ValueNotFoundError(LinkVizError):
    """Raised when a value-based lookup finds no matching node."""

    def __init__(self, value: int) -> None:
        super().__init__(f"No node with value {value}")
        self.value = value


class InconsistentListError(LinkVizError):
    """Raised when a list's node graph disagrees with its recorded size or links."""
