"""Tests for the plain-text purchase reports."""

import pytest

from bookstore_analytics.core.config import AnalyticsConfig
from bookstore_analytics.purchases.index import PurchaseIndex
from bookstore_analytics.purchases.report import PurchaseReports
from bookstore_analytics.purchases.service import Purchases


@pytest.fixture
def reports(purchases, catalog, sim_clock):
    return PurchaseReports(purchases, catalog, clock=sim_clock)


@pytest.fixture
def empty_reports(catalog, sim_clock):
    return PurchaseReports(Purchases(PurchaseIndex(clock=sim_clock)), catalog, clock=sim_clock)


class TestBooks:
    def test_found(self, reports):
        assert reports.books("alpha") == "1 books found:\nAlpha Tales; by Ann Archer"

    def test_not_found(self, reports):
        assert reports.books("zeta") == "No books found"


class TestBestSellers:
    def test_worldwide_current_year(self, reports):
        assert reports.best_sellers() == (
            "Best selling books in 2024\n"
            "7 Beta Stories; by Ben Baker\n"
            "5 Gamma Rays; by Cleo Clark\n"
            "3 Alpha Tales; by Ann Archer"
        )

    def test_by_country(self, reports):
        text = reports.best_sellers(2024, "de")
        assert text.splitlines()[0] == "Best selling books in Germany in 2024"
        assert text.splitlines()[1] == "3 Gamma Rays; by Cleo Clark"

    def test_limit(self, purchases, catalog, sim_clock):
        reports = PurchaseReports(purchases, catalog, clock=sim_clock,
                                  config=AnalyticsConfig(best_seller_limit=1))
        assert len(reports.best_sellers(2024).splitlines()) == 2

    def test_unknown_country(self, reports):
        assert reports.best_sellers(2024, "JP") == "Country not found"

    def test_nothing_sold(self, reports):
        assert reports.best_sellers(2010) == "No books sold in 2010"
        assert reports.best_sellers(2010, "FR") == "No books sold in France in 2010"


class TestPurchasesOfForeigners:
    def test_worldwide(self, reports):
        assert reports.purchases_of_foreigners(2024) == "Purchases of foreigners in 2024\n3"

    def test_by_country(self, reports):
        assert reports.purchases_of_foreigners(2024, "US") == (
            "Purchases of foreigners in United States in 2024\n2"
        )

    def test_unknown_country(self, reports):
        assert reports.purchases_of_foreigners(2024, "XX") == "Country not found"

    def test_empty(self, empty_reports):
        assert empty_reports.purchases_of_foreigners() == "Purchases of foreigners in 2024\n0"


class TestEmployeeOfTheYear:
    def test_worldwide(self, reports):
        assert reports.employee_of_the_year(2024) == "Employee of the year 2024\nCarl"

    def test_by_country(self, reports):
        assert reports.employee_of_the_year(2024, "US") == (
            "Employee of the year 2024 in United States\nBob"
        )

    def test_absent(self, empty_reports):
        assert empty_reports.employee_of_the_year() == "Employee of the year 2024\nNo purchases in 2024"
        assert empty_reports.employee_of_the_year(2024, "FR") == (
            "Employee of the year 2024 in France\nNo purchases in France in 2024"
        )

    def test_unknown_country(self, reports):
        assert reports.employee_of_the_year(2024, "XX") == "Country not found"
