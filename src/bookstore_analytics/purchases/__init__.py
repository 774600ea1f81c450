"""Sales analytics over purchase records.

Key components
--------------
Purchase          Immutable sale event with cached total
PurchaseItem      One line item (book, unit price, quantity)
BookSales         Book paired with aggregated quantity
PurchaseIndex     Year/country partitioned store answering aggregate queries
Purchases         Public query façade over the index
MoneySummary      Count/sum/min/max/average of purchase totals
PurchaseReports   Plain-text report rendering
"""

from .record import BookSales, Purchase, PurchaseItem
from .index import PurchaseIndex
from .service import Purchases
from .statistics import MoneySummary, summarize, summarize_totals
from .report import PurchaseReports

__all__ = [
    "BookSales",
    "Purchase",
    "PurchaseItem",
    "PurchaseIndex",
    "Purchases",
    "MoneySummary",
    "summarize",
    "summarize_totals",
    "PurchaseReports",
]
