"""Catalog — keyed master tables for books, shops, employees and customers.

The catalog owns every master record. Purchases reference these records
but never copy or mutate them; drill-down from an identifier back to the
full record goes through the ``get_*`` / ``require_*`` lookups here.

Writes are serialized with an ``RLock``. Reads are plain dict lookups and
never block.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable

from bookstore_analytics.core.errors import NotFoundError
from bookstore_analytics.core.models import Book, Country, Customer, Employee, Shop

logger = logging.getLogger(__name__)


class Catalog:
    """Registry of master data, keyed by natural identifier."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._countries: dict[str, Country] = {}
        self._books: dict[str, Book] = {}
        self._shops: dict[str, Shop] = {}
        self._employees: dict[str, Employee] = {}
        self._customers: dict[str, Customer] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_country(self, country: Country) -> Country:
        with self._lock:
            self._countries[country.code] = country
        logger.debug("Registered country %s", country.code)
        return country

    def add_book(self, book: Book) -> Book:
        with self._lock:
            self._books[book.isbn13] = book
        logger.debug("Registered book %s", book.isbn13)
        return book

    def add_shop(self, shop: Shop) -> Shop:
        with self._lock:
            self._shops[shop.name] = shop
        logger.debug("Registered shop %s (%s)", shop.name, shop.country_code)
        return shop

    def add_employee(self, employee: Employee) -> Employee:
        with self._lock:
            self._employees[employee.id] = employee
        logger.debug("Registered employee %s", employee.id)
        return employee

    def add_customer(self, customer: Customer) -> Customer:
        with self._lock:
            self._customers[customer.id] = customer
        logger.debug("Registered customer %s", customer.id)
        return customer

    def add_all(self, records: Iterable[Country | Book | Shop | Employee | Customer]) -> None:
        """Register a mixed batch of master records."""
        adders = {
            Country: self.add_country,
            Book: self.add_book,
            Shop: self.add_shop,
            Employee: self.add_employee,
            Customer: self.add_customer,
        }
        for record in records:
            adder = adders.get(type(record))
            if adder is None:
                raise TypeError(f"Not a master record: {type(record).__name__}")
            adder(record)

    # ------------------------------------------------------------------
    # Lookups (None when absent)
    # ------------------------------------------------------------------

    def country_by_code(self, code: str) -> Country | None:
        return self._countries.get(code.strip().upper())

    def get_book(self, isbn13: str) -> Book | None:
        return self._books.get(isbn13)

    def get_shop(self, name: str) -> Shop | None:
        return self._shops.get(name)

    def get_employee(self, employee_id: str) -> Employee | None:
        return self._employees.get(employee_id)

    def get_customer(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    # ------------------------------------------------------------------
    # Lookups (raise when absent)
    # ------------------------------------------------------------------

    def require_country(self, code: str) -> Country:
        country = self.country_by_code(code)
        if country is None:
            raise NotFoundError("Country", code)
        return country

    def require_book(self, isbn13: str) -> Book:
        book = self.get_book(isbn13)
        if book is None:
            raise NotFoundError("Book", isbn13)
        return book

    def require_shop(self, name: str) -> Shop:
        shop = self.get_shop(name)
        if shop is None:
            raise NotFoundError("Shop", name)
        return shop

    def require_employee(self, employee_id: str) -> Employee:
        employee = self.get_employee(employee_id)
        if employee is None:
            raise NotFoundError("Employee", employee_id)
        return employee

    def require_customer(self, customer_id: str) -> Customer:
        customer = self.get_customer(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    # ------------------------------------------------------------------
    # Listing / search
    # ------------------------------------------------------------------

    def countries(self) -> list[Country]:
        """All countries, sorted by code."""
        return sorted(self._countries.copy().values(), key=lambda c: c.code)

    def books(self) -> list[Book]:
        return list(self._books.copy().values())

    def shops_in(self, country_code: str) -> list[Shop]:
        code = country_code.strip().upper()
        return [s for s in self._shops.copy().values() if s.country_code == code]

    def search_books_by_title(self, query: str) -> list[Book]:
        """Case-insensitive substring search on titles, sorted by title."""
        needle = query.strip().lower()
        if not needle:
            return []
        hits = [b for b in self._books.copy().values() if needle in b.title.lower()]
        return sorted(hits, key=lambda b: (b.title, b.isbn13))
