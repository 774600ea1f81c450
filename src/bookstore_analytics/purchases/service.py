"""Purchases — public query surface over a :class:`PurchaseIndex`.

Reporting and UI code talk to this class only. Countries may be passed
either as :class:`Country` records or as ISO alpha-2 codes.

Usage::

    purchases = Purchases.from_settings(load_settings(), configure_logging=True)
    purchases.add_all(generated)
    top = purchases.best_seller_list(2024, "US")[:10]
    eoty = purchases.employee_of_the_year(2024)
    if eoty is None:
        ...  # no purchases that year
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Iterable, Iterator, TypeVar, Union

from bookstore_analytics.core.clock import IClock
from bookstore_analytics.core.config import Settings
from bookstore_analytics.core.errors import CurrencyMismatch
from bookstore_analytics.core.models import Country, Employee
from bookstore_analytics.core.money import DEFAULT_CURRENCY
from bookstore_analytics.core.range import Range
from bookstore_analytics.observability.logger import query_scope, setup_logging

from .index import PurchaseIndex
from .record import BookSales, Purchase
from .statistics import MoneySummary, summarize_totals

logger = logging.getLogger(__name__)

R = TypeVar("R")

CountryRef = Union[Country, str, None]


def _country_code(country: CountryRef) -> str | None:
    if country is None:
        return None
    if isinstance(country, Country):
        return country.code
    return country.strip().upper()


class Purchases:
    """Analytics façade delegating to a :class:`PurchaseIndex`.

    Every purchase added must be priced in the façade's currency; anything
    else raises :class:`CurrencyMismatch` before it reaches the index.
    """

    def __init__(
        self,
        index: PurchaseIndex | None = None,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        # An empty index is falsy (it has __len__), so test for None explicitly
        self._index = index if index is not None else PurchaseIndex()
        self._currency = currency

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        clock: IClock | None = None,
        configure_logging: bool = False,
    ) -> Purchases:
        if configure_logging:
            setup_logging(settings.observability)
        index = PurchaseIndex(config=settings.analytics, clock=clock)
        logger.debug(
            "Purchases ready: currency=%s max_workers=%d parallel_threshold=%d",
            settings.money.currency,
            settings.analytics.max_workers,
            settings.analytics.parallel_threshold,
        )
        return cls(index, currency=settings.money.currency)

    @property
    def currency(self) -> str:
        return self._currency

    # ------------------------------------------------------------------ #
    # Population                                                           #
    # ------------------------------------------------------------------ #

    def _checked(self, purchase: Purchase) -> Purchase:
        if isinstance(purchase, Purchase) and purchase.total.currency != self._currency:
            raise CurrencyMismatch(self._currency, purchase.total.currency)
        return purchase

    def add(self, purchase: Purchase) -> None:
        self._index.append(self._checked(purchase))

    def add_all(self, purchases: Iterable[Purchase]) -> int:
        """Append *purchases* in order.

        Stops at the first rejected purchase; the ones before it stay indexed.
        """
        n = self._index.extend(self._checked(p) for p in purchases)
        logger.info("Indexed %d purchases (%d total)", n, len(self._index))
        return n

    def purchase_count(self) -> int:
        return len(self._index)

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def years(self) -> Range:
        return self._index.years()

    def purchases(self, year: int, country: CountryRef = None) -> list[Purchase]:
        return self._index.purchases(year, _country_code(country))

    def best_seller_list(self, year: int, country: CountryRef = None) -> list[BookSales]:
        code = _country_code(country)
        with query_scope(year, code):
            return self._index.best_seller_list(year, code)

    def count_purchases_of_foreigners(self, year: int, country: CountryRef = None) -> int:
        code = _country_code(country)
        with query_scope(year, code):
            return self._index.count_purchases_of_foreigners(year, code)

    def employee_of_the_year(self, year: int, country: CountryRef = None) -> Employee | None:
        code = _country_code(country)
        with query_scope(year, code):
            return self._index.employee_of_the_year(year, code)

    def compute_by_year(self, year: int, function: Callable[[Iterator[Purchase]], R]) -> R:
        with query_scope(year):
            return self._index.compute_by_year(year, function)

    def summary(
        self,
        year: int,
        predicate: Callable[[Purchase], bool] | None = None,
    ) -> MoneySummary:
        """Count/sum/min/max/average of purchase totals in *year*."""
        return self.compute_by_year(
            year, partial(summarize_totals, predicate=predicate, currency=self._currency)
        )
