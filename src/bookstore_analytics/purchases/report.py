"""Plain-text reports over the purchases façade.

Each method returns the full report as a string; printing or shipping it
somewhere is up to the caller. A ``year`` of 0 means the current year and
an empty ``country_code`` means worldwide.
"""

from __future__ import annotations

from bookstore_analytics.catalog.registry import Catalog
from bookstore_analytics.core.clock import IClock, WallClock
from bookstore_analytics.core.config import AnalyticsConfig
from bookstore_analytics.core.models import Country

from .record import BookSales
from .service import Purchases

COUNTRY_NOT_FOUND = "Country not found"


class PurchaseReports:
    """Renders best-seller, foreigner and employee-of-the-year reports.

    Parameters
    ----------
    purchases : Purchases
        Query façade.
    catalog : Catalog
        Resolves country codes and book searches.
    clock : IClock, optional
        Supplies the current year for ``year=0``.
    config : AnalyticsConfig, optional
        ``best_seller_limit`` caps best-seller listings.
    """

    def __init__(
        self,
        purchases: Purchases,
        catalog: Catalog,
        clock: IClock | None = None,
        config: AnalyticsConfig | None = None,
    ) -> None:
        self._purchases = purchases
        self._catalog = catalog
        self._clock = clock or WallClock()
        self._limit = (config or AnalyticsConfig()).best_seller_limit

    def _year(self, year: int) -> int:
        return year if year else self._clock.current_year()

    def _country(self, country_code: str) -> Country | None:
        return self._catalog.country_by_code(country_code)

    @staticmethod
    def _sales_line(sales: BookSales) -> str:
        return f"{sales.amount} {sales.book.title}; by {sales.book.author}"

    # ------------------------------------------------------------------ #

    def books(self, query: str) -> str:
        books = self._catalog.search_books_by_title(query)
        if not books:
            return "No books found"
        lines = [f"{len(books)} books found:"]
        lines.extend(f"{b.title}; by {b.author}" for b in books)
        return "\n".join(lines)

    def best_sellers(self, year: int = 0, country_code: str = "") -> str:
        year = self._year(year)
        if not country_code:
            ranking = self._purchases.best_seller_list(year)
            if not ranking:
                return f"No books sold in {year}"
            header = f"Best selling books in {year}"
        else:
            country = self._country(country_code)
            if country is None:
                return COUNTRY_NOT_FOUND
            ranking = self._purchases.best_seller_list(year, country)
            if not ranking:
                return f"No books sold in {country.name} in {year}"
            header = f"Best selling books in {country.name} in {year}"
        lines = [header]
        lines.extend(self._sales_line(s) for s in ranking[: self._limit])
        return "\n".join(lines)

    def purchases_of_foreigners(self, year: int = 0, country_code: str = "") -> str:
        year = self._year(year)
        if not country_code:
            count = self._purchases.count_purchases_of_foreigners(year)
            return f"Purchases of foreigners in {year}\n{count}"
        country = self._country(country_code)
        if country is None:
            return COUNTRY_NOT_FOUND
        count = self._purchases.count_purchases_of_foreigners(year, country)
        return f"Purchases of foreigners in {country.name} in {year}\n{count}"

    def employee_of_the_year(self, year: int = 0, country_code: str = "") -> str:
        year = self._year(year)
        if not country_code:
            employee = self._purchases.employee_of_the_year(year)
            header = f"Employee of the year {year}"
            empty = f"No purchases in {year}"
        else:
            country = self._country(country_code)
            if country is None:
                return COUNTRY_NOT_FOUND
            employee = self._purchases.employee_of_the_year(year, country)
            header = f"Employee of the year {year} in {country.name}"
            empty = f"No purchases in {country.name} in {year}"
        if employee is None:
            return f"{header}\n{empty}"
        return f"{header}\n{employee.name}"
