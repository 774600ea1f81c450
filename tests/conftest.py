"""Shared fixtures for the bookstore-analytics test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from bookstore_analytics.catalog.registry import Catalog
from bookstore_analytics.core.clock import SimClock
from bookstore_analytics.purchases.index import PurchaseIndex
from bookstore_analytics.purchases.service import Purchases

from factories import MASTER_RECORDS, sample_purchases


@pytest.fixture
def sim_clock() -> SimClock:
    """Return a SimClock starting at 2024-06-01 00:00 UTC."""
    return SimClock(start=datetime(2024, 6, 1, tzinfo=timezone.utc))


@pytest.fixture
def catalog() -> Catalog:
    cat = Catalog()
    cat.add_all(MASTER_RECORDS)
    return cat


@pytest.fixture
def index(sim_clock) -> PurchaseIndex:
    return PurchaseIndex(clock=sim_clock)


@pytest.fixture
def populated_index(index) -> PurchaseIndex:
    """Index holding :func:`factories.sample_purchases`."""
    index.extend(sample_purchases())
    return index


@pytest.fixture
def purchases(populated_index) -> Purchases:
    return Purchases(populated_index)
