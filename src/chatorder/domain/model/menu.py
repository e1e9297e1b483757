"""MenuEntry — a catalog item selectable by its numeric code.

The catalog is read-mostly: entries are seeded once and never mutated
by the ordering flow.  ``code`` is the only client-facing identifier.
"""

from __future__ import annotations

from dataclasses import dataclass

from chatorder.domain.exceptions import ValidationError
from chatorder.domain.model.value_objects import Money


@dataclass(frozen=True)
class MenuEntry:

    code: int
    name: str
    price: Money
    description: str | None = None

    def __post_init__(self) -> None:
        if self.code < 0:
            raise ValidationError("Menu code must not be negative")
        if not self.name or not self.name.strip():
            raise ValidationError("Menu entry name is required")
