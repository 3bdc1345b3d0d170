"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")

Numeric = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value with currency.

    Arithmetic keeps full decimal precision. Rounding to currency
    precision only happens through round2(), so callers decide exactly
    where a value is rounded.

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal
    currency: str = "USD"

    def __post_init__(self):
        # Convert to Decimal if needed
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if not self.amount.is_finite():
            raise ValueError(f"Money amount must be finite, got: {self.amount}")

        # Validate currency code (3 letters)
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )

    @classmethod
    def of(cls, amount: Numeric, currency: str = "USD") -> "Money":
        """Build Money from a str, int, float or Decimal amount."""
        return cls(amount=Decimal(str(amount)), currency=currency)

    @classmethod
    def zero(cls, currency: str = "USD") -> "Money":
        return cls(amount=Decimal("0.00"), currency=currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _check_currency(self, other: "Money", operation: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {operation} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot {operation} different currencies: {self.currency} vs {other.currency}"
            )

    def __add__(self, other: 'Money') -> 'Money':
        """Add two Money objects (must have same currency)."""
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        """Subtract two Money objects (must have same currency)."""
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, factor: Union[Decimal, int]) -> 'Money':
        """Scale by a quantity or rate. The result is not rounded."""
        if isinstance(factor, float):
            factor = Decimal(str(factor))
        if not isinstance(factor, (Decimal, int)) or isinstance(factor, bool):
            return NotImplemented
        return Money(amount=self.amount * factor, currency=self.currency)

    __rmul__ = __mul__

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def round2(self) -> 'Money':
        """Round to currency precision (2 places, half-up)."""
        return Money(
            amount=self.amount.quantize(CENT, rounding=ROUND_HALF_UP),
            currency=self.currency,
        )

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == 0
