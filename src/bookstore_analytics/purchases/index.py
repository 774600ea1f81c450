"""PurchaseIndex — purchases partitioned by year and country.

Every purchase lives in exactly one year partition (the calendar year of
its timestamp) and, inside that partition, in the list for its shop's
country. Queries touch only the partition they ask about.

Concurrency model
-----------------
Partitions are append-only lists and purchases are immutable, so a reader
takes a length snapshot of the list it needs and iterates that prefix
without any lock. The single write lock only serializes ``append`` (and
therefore partition creation). A purchase becomes visible only once it is
fully built, since it is published by a single ``list.append``.

Large partitions can be aggregated in chunks on a thread pool when
``AnalyticsConfig.max_workers > 1``; only associative merges (counts, sums,
per-key totals) are split that way. ``compute_by_year`` always runs the
caller's reduction sequentially.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from itertools import islice
from typing import Callable, Iterable, Iterator, Sequence, TypeVar

from bookstore_analytics.core.clock import IClock, WallClock
from bookstore_analytics.core.config import AnalyticsConfig
from bookstore_analytics.core.errors import InvariantViolation
from bookstore_analytics.core.models import Book, Employee
from bookstore_analytics.core.money import Money
from bookstore_analytics.core.range import Range

from .record import BookSales, Purchase

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class _YearPartition:
    """All purchases of one year plus a per-country sub-index."""

    __slots__ = ("year", "all", "by_country")

    def __init__(self, year: int) -> None:
        self.year = year
        self.all: list[Purchase] = []
        self.by_country: dict[str, list[Purchase]] = {}

    def add(self, purchase: Purchase) -> bool:
        """Append *purchase*. Returns True when a country list was created.

        Caller must hold the index write lock.
        """
        code = purchase.country_code
        created = False
        country_list = self.by_country.get(code)
        if country_list is None:
            country_list = []
            self.by_country[code] = country_list
            created = True
        country_list.append(purchase)
        self.all.append(purchase)
        return created


# ---------------------------------------------------------------------------
# Chunk folds (each must be mergeable associatively)
# ---------------------------------------------------------------------------

_BookTally = tuple[Counter, dict[str, Book]]
_EmployeeTally = tuple[dict[str, Money], dict[str, Employee]]


def _tally_books(purchases: Iterable[Purchase]) -> _BookTally:
    counts: Counter = Counter()
    books: dict[str, Book] = {}
    for purchase in purchases:
        for book, amount in purchase.book_amounts():
            counts[book.isbn13] += amount
            books.setdefault(book.isbn13, book)
    return counts, books


def _merge_book_tallies(left: _BookTally, right: _BookTally) -> _BookTally:
    left[0].update(right[0])
    for isbn, book in right[1].items():
        left[1].setdefault(isbn, book)
    return left


def _tally_employees(purchases: Iterable[Purchase]) -> _EmployeeTally:
    totals: dict[str, Money] = {}
    employees: dict[str, Employee] = {}
    for purchase in purchases:
        eid = purchase.employee.id
        current = totals.get(eid)
        totals[eid] = purchase.total if current is None else current.add(purchase.total)
        employees.setdefault(eid, purchase.employee)
    return totals, employees


def _merge_employee_tallies(left: _EmployeeTally, right: _EmployeeTally) -> _EmployeeTally:
    totals, employees = left
    for eid, total in right[0].items():
        current = totals.get(eid)
        totals[eid] = total if current is None else current.add(total)
    for eid, employee in right[1].items():
        employees.setdefault(eid, employee)
    return left


def _count_foreign(country_code: str | None) -> Callable[[Iterable[Purchase]], int]:
    def fold(purchases: Iterable[Purchase]) -> int:
        return sum(1 for p in purchases if p.is_foreign(country_code))

    return fold


def _add(left: int, right: int) -> int:
    return left + right


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------

class PurchaseIndex:
    """Year/country partitioned store of purchases with aggregate queries.

    Parameters
    ----------
    config : AnalyticsConfig, optional
        Parallel aggregation settings. Defaults to sequential.
    clock : IClock, optional
        Supplies the current year reported by :meth:`years` while empty.
    """

    def __init__(
        self,
        config: AnalyticsConfig | None = None,
        clock: IClock | None = None,
    ) -> None:
        self._config = config or AnalyticsConfig()
        self._clock = clock or WallClock()
        self._lock = threading.Lock()
        self._by_year: dict[int, _YearPartition] = {}
        # Published atomically whenever a new year appears
        self._years: Range | None = None
        self._count = 0

    # ------------------------------------------------------------------ #
    # Writes                                                               #
    # ------------------------------------------------------------------ #

    def append(self, purchase: Purchase) -> None:
        """Insert *purchase* into its year and country partitions.

        Raises
        ------
        InvariantViolation
            If *purchase* is not a :class:`Purchase`.
        """
        if not isinstance(purchase, Purchase):
            raise InvariantViolation(
                f"Only Purchase records can be indexed, got {type(purchase).__name__}"
            )
        year = purchase.year
        with self._lock:
            partition = self._by_year.get(year)
            if partition is None:
                partition = _YearPartition(year)
                self._by_year[year] = partition
                self._years = Range.single(year) if self._years is None else self._years.extend(year)
                logger.debug("Created partition for year %d", year)
            if partition.add(purchase):
                logger.debug(
                    "Created partition for country %s in year %d",
                    purchase.country_code, year,
                )
            self._count += 1

    def extend(self, purchases: Iterable[Purchase]) -> int:
        """Append every purchase in order. Returns the number appended."""
        n = 0
        for purchase in purchases:
            self.append(purchase)
            n += 1
        return n

    # ------------------------------------------------------------------ #
    # Inspection                                                           #
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return self._count

    def years(self) -> Range:
        """Span of years holding purchases.

        An empty index reports the clock's current year as a single-year
        range so callers never have to special-case "no data yet".
        """
        span = self._years
        if span is None:
            return Range.single(self._clock.current_year())
        return span

    def countries(self, year: int) -> list[str]:
        """Country codes with purchases in *year*, sorted."""
        partition = self._by_year.get(year)
        if partition is None:
            return []
        return sorted(partition.by_country.copy())

    def purchases(self, year: int, country_code: str | None = None) -> list[Purchase]:
        """Snapshot copy of the selected partition, in insertion order."""
        selected = self._select(year, country_code)
        return list(selected[: len(selected)])

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def best_seller_list(self, year: int, country_code: str | None = None) -> list[BookSales]:
        """Books ranked by copies sold, most first.

        Ties are ordered by ``isbn13`` ascending so that truncating the list
        to a top-N view is reproducible. Unknown year/country → ``[]``.
        """
        selected = self._select(year, country_code)
        if not selected:
            return []
        counts, books = self._aggregate(selected, _tally_books, _merge_book_tallies)
        ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
        return [BookSales(book=books[isbn], amount=amount) for isbn, amount in ranked]

    def count_purchases_of_foreigners(self, year: int, country_code: str | None = None) -> int:
        """Purchases whose customer lives outside the shop's country.

        With *country_code*, only shops in that country are considered and
        "foreign" means the customer does not live in *country_code*.
        """
        selected = self._select(year, country_code)
        if not selected:
            return 0
        return self._aggregate(selected, _count_foreign(country_code), _add)

    def employee_of_the_year(self, year: int, country_code: str | None = None) -> Employee | None:
        """Employee with the highest summed purchase total, or None when there are no purchases.

        Equal totals are resolved in favour of the lowest employee id.
        """
        selected = self._select(year, country_code)
        if not selected:
            return None
        totals, employees = self._aggregate(selected, _tally_employees, _merge_employee_tallies)
        best_id, _ = min(totals.items(), key=lambda kv: (-kv[1].amount, kv[0]))
        return employees[best_id]

    def compute_by_year(self, year: int, function: Callable[[Iterator[Purchase]], R]) -> R:
        """Apply *function* to a lazy iterator over the year's purchases.

        The iterator covers the purchases present when the call starts. An
        unknown year yields an empty iterator. *function* must not try to
        mutate the purchases.
        """
        selected = self._select(year, None)
        return function(islice(selected, len(selected)))

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _select(self, year: int, country_code: str | None) -> Sequence[Purchase]:
        partition = self._by_year.get(year)
        if partition is None:
            return ()
        if country_code is None:
            return partition.all
        return partition.by_country.get(country_code, ())

    def _aggregate(
        self,
        purchases: Sequence[Purchase],
        fold: Callable[[Iterable[Purchase]], T],
        merge: Callable[[T, T], T],
    ) -> T:
        n = len(purchases)
        cfg = self._config
        if not cfg.parallel or n < cfg.parallel_threshold:
            return fold(islice(purchases, n))

        step = cfg.chunk_size
        chunks = [purchases[i:min(i + step, n)] for i in range(0, n, step)]
        logger.debug(
            "Aggregating %d purchases in %d chunks on %d workers",
            n, len(chunks), cfg.max_workers,
        )
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as pool:
            partials = list(pool.map(fold, chunks))
        return reduce(merge, partials)
