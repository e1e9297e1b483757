"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from chatorder.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """Whole-unit monetary amount in the catalog currency.

    Prices are integers in the catalog's unit (e.g. naira).  The gateway
    works in minor units (kobo), see ``to_minor_units``.
    """

    amount: int
    currency: str = "NGN"

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValidationError(
                f"Money amount must be an int, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def to_minor_units(self, factor: int = 100) -> int:
        """Convert to the gateway's minor unit (naira -> kobo by default)."""
        return self.amount * factor

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero(currency: str = "NGN") -> Money:
        return Money(0, currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that an order line never holds zero or
    negative units.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def increment(self, by: int = 1) -> Quantity:
        return Quantity(self.value + by)

    def __str__(self) -> str:
        return str(self.value)
