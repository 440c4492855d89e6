"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value at cents precision.

    All pricing arithmetic happens on Decimal amounts quantized to two
    places. Conversion to float is only allowed when building API
    responses (see to_float()).

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal

    def __post_init__(self):
        amount = self.amount
        if isinstance(amount, float):
            raise TypeError("Money cannot be built from float, pass a Decimal or str")
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))
        object.__setattr__(self, 'amount', amount.quantize(CENTS, rounding=ROUND_HALF_UP))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(amount=Decimal("0.00"))

    def __str__(self) -> str:
        return f"{self.amount}"

    def __add__(self, other: 'Money') -> 'Money':
        """Add two Money objects."""
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(amount=self.amount - other.amount)

    def __mul__(self, quantity: int) -> 'Money':
        """Multiply by an integer quantity (line total)."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Money can only be multiplied by an int quantity, got {quantity!r}")
        return Money(amount=self.amount * quantity)

    __rmul__ = __mul__

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0

    def to_float(self) -> float:
        """Float view for response bodies only."""
        return float(self.amount)


def money_sum(values) -> Money:
    """Sum an iterable of Money, starting from zero."""
    total = Money.zero()
    for value in values:
        total = total + value
    return total
