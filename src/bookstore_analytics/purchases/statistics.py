"""Summary statistics over purchase totals.

Meant as reductions for ``PurchaseIndex.compute_by_year``::

    stats = index.compute_by_year(2024, summarize_totals)
    stats.sum.format()  # '$12,345.67'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from bookstore_analytics.core.money import DEFAULT_CURRENCY, Money

from .record import Purchase


@dataclass(frozen=True)
class MoneySummary:
    """Count, sum, min, max and average of a set of amounts.

    ``min``, ``max`` and ``average`` are None when ``count`` is 0.
    """

    count: int
    sum: Money
    min: Money | None = None
    max: Money | None = None
    average: Money | None = None


def summarize(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> MoneySummary:
    count = 0
    total = Money.zero(currency)
    lo: Money | None = None
    hi: Money | None = None
    for amount in amounts:
        count += 1
        total = total.add(amount)
        if lo is None or amount < lo:
            lo = amount
        if hi is None or amount > hi:
            hi = amount
    if count == 0:
        return MoneySummary(count=0, sum=total)
    return MoneySummary(count=count, sum=total, min=lo, max=hi, average=total.divide(count))


def summarize_totals(
    purchases: Iterable[Purchase],
    predicate: Callable[[Purchase], bool] | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> MoneySummary:
    """Summarize ``Purchase.total`` over *purchases* matching *predicate*."""
    if predicate is not None:
        purchases = (p for p in purchases if predicate(p))
    return summarize((p.total for p in purchases), currency)
