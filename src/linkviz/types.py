"""Type definitions for linkviz."""

import enum
from typing import Literal, TypeAlias

from linkviz.errors import InvalidVariantError

# Variant names as they appear on the wire
VariantName: TypeAlias = Literal["single", "double", "circular"]


class Variant(str, enum.Enum):
    """Link topology of a list. Fixed when the list is created."""

    SINGLE = "single"
    DOUBLE = "double"
    CIRCULAR = "circular"

    @classmethod
    def parse(cls, name: "Variant | str") -> "Variant":
        """Return the variant for ``name``, raising InvalidVariantError if unknown."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise InvalidVariantError(name) from None
