"""Purchase records — the core data model.

A :class:`Purchase` captures one sale event: which shop, which employee,
which customer, when, and the ordered line items. Records are immutable
once built and are validated eagerly, so a malformed purchase never
reaches the index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from bookstore_analytics.core.errors import InvariantViolation
from bookstore_analytics.core.models import Book, Customer, Employee, Shop
from bookstore_analytics.core.money import Money


@dataclass(frozen=True)
class PurchaseItem:
    """One line of a purchase: ``amount`` copies of ``book`` at ``price`` each."""

    book: Book
    price: Money
    amount: int
    item_total: Money = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.book, Book):
            raise InvariantViolation(f"book must be a Book, got {type(self.book).__name__}")
        if not isinstance(self.price, Money):
            raise InvariantViolation(f"price must be Money, got {type(self.price).__name__}")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvariantViolation(f"amount must be an int, got {self.amount!r}")
        if self.amount <= 0:
            raise InvariantViolation(f"amount must be positive, got {self.amount}")
        object.__setattr__(self, "item_total", self.price.multiply(self.amount))


@dataclass(frozen=True, eq=False)
class Purchase:
    """Consolidated record for one sale.

    Parameters
    ----------
    shop, employee, customer : master records
        Non-owning references into the catalog.
    timestamp : datetime
        Timezone-aware moment of the sale. Its calendar year selects the
        index partition.
    items : sequence of PurchaseItem
        Must be non-empty. Stored as a tuple.
    """

    shop: Shop
    employee: Employee
    customer: Customer
    timestamp: datetime
    items: tuple[PurchaseItem, ...]
    total: Money = field(init=False)

    def __post_init__(self) -> None:
        for name, kind in (("shop", Shop), ("employee", Employee), ("customer", Customer)):
            value = getattr(self, name)
            if not isinstance(value, kind):
                raise InvariantViolation(
                    f"{name} must be a {kind.__name__}, got {type(value).__name__}"
                )
        if not isinstance(self.timestamp, datetime):
            raise InvariantViolation(f"timestamp must be a datetime, got {self.timestamp!r}")
        if self.timestamp.tzinfo is None:
            raise InvariantViolation("timestamp must be timezone-aware")

        items = tuple(self.items)
        if not items:
            raise InvariantViolation("purchase must have at least one item")
        for item in items:
            if not isinstance(item, PurchaseItem):
                raise InvariantViolation(f"items must be PurchaseItem, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

        currency = items[0].price.currency
        object.__setattr__(self, "total", Money.sum((i.item_total for i in items), currency))

    @property
    def year(self) -> int:
        return self.timestamp.year

    @property
    def country_code(self) -> str:
        """Country of the shop the sale happened in."""
        return self.shop.country_code

    def is_foreign(self, country_code: str | None = None) -> bool:
        """Whether the customer lives outside *country_code* (default: the shop's country)."""
        reference = country_code if country_code is not None else self.shop.country_code
        return self.customer.country_code != reference

    def book_amounts(self) -> Iterable[tuple[Book, int]]:
        for item in self.items:
            yield item.book, item.amount


@dataclass(frozen=True)
class BookSales:
    """A book paired with the number of copies sold within some scope."""

    book: Book
    amount: int
