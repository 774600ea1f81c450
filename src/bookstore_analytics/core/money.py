"""Exact fixed-point monetary amounts.

All amounts are ``Decimal`` values quantized to :data:`SCALE` fractional
digits with ``ROUND_HALF_UP`` after every operation, so chained arithmetic
matches a reference decimal calculator and never picks up binary
floating-point error.

Usage::

    price = Money.of("12.50")
    line = price * 3                  # Money('37.50', 'USD')
    total = Money.sum([line, price])  # Money('50.00', 'USD')
    total.format()                    # '$50.00'
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable, Union

from .errors import CurrencyMismatch

# Fractional digits kept on every amount
SCALE = 2
_QUANTUM = Decimal(1).scaleb(-SCALE)  # Decimal("0.01")

# Single-currency deployment
DEFAULT_CURRENCY = "USD"
DEFAULT_SYMBOL = "$"

# Markup applied to every purchase price to derive a retail price (11% margin)
RETAIL_MULTIPLIER = Decimal("1.11")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert *value* to ``Decimal`` without going through binary floats."""
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary amount")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            d = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Not a decimal number: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")
    if not d.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return d


def scale(value: Number) -> Decimal:
    """Round *value* to :data:`SCALE` digits, half-up."""
    return to_decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP)


@total_ordering
@dataclass(frozen=True)
class Money:
    """Immutable amount of a single currency.

    Parameters
    ----------
    amount : Decimal
        Rounded to :data:`SCALE` digits on construction.
    currency : str
        ISO 4217 code.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", scale(self.amount))

    # ------------------------------------------------------------------ #
    # Factories                                                            #
    # ------------------------------------------------------------------ #

    @classmethod
    def of(cls, value: Number, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(to_decimal(value), currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal(0), currency)

    @classmethod
    def from_minor_units(cls, units: int, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from an integer count of minor units (e.g. cents)."""
        return cls(Decimal(units).scaleb(-SCALE), currency)

    @classmethod
    def sum(cls, amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Sum *amounts*; an empty iterable yields zero in *currency*."""
        total = cls.zero(currency)
        for m in amounts:
            total = total.add(m)
        return total

    # ------------------------------------------------------------------ #
    # Arithmetic                                                           #
    # ------------------------------------------------------------------ #

    def add(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Number) -> Money:
        return Money(self.amount * to_decimal(factor), self.currency)

    def divide(self, divisor: int | Decimal) -> Money:
        """Divide by a non-zero scalar, rounding the quotient half-up."""
        d = to_decimal(divisor)
        if d == 0:
            raise ZeroDivisionError("Money division by zero")
        return Money(self.amount / d, self.currency)

    def __add__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> Money:
        # Lets builtin sum() start from 0
        if other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor: object) -> Money:
        if isinstance(factor, (Money, bool)) or not isinstance(factor, (Decimal, int, float, str)):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def __neg__(self) -> Money:
        return Money(-self.amount, self.currency)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return self.amount < other.amount

    # ------------------------------------------------------------------ #
    # Inspection / formatting                                              #
    # ------------------------------------------------------------------ #

    @property
    def minor_units(self) -> int:
        """Amount as an integer count of minor units."""
        return int(self.amount.scaleb(SCALE))

    def is_zero(self) -> bool:
        return self.amount == 0

    def format(self, symbol: str = DEFAULT_SYMBOL) -> str:
        """Render as ``$1,234.56`` (``-$1.00`` for negatives)."""
        sign = "-" if self.amount < 0 else ""
        return f"{sign}{symbol}{abs(self.amount):,.{SCALE}f}"

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.{SCALE}f}"

    def __repr__(self) -> str:
        return f"Money('{self.amount}', '{self.currency}')"

    def _check_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise CurrencyMismatch(self.currency, other.currency)


def retail_price(purchase_price: Money) -> Money:
    """Sale price derived from a purchase price by applying the retail margin.

    See :data:`RETAIL_MULTIPLIER`.
    """
    return purchase_price.multiply(RETAIL_MULTIPLIER)
