"""Tests for master data models."""

import pytest
from pydantic import ValidationError

from bookstore_analytics.core.models import Book, Country, Customer, Shop
from bookstore_analytics.core.money import Money


class TestCountry:
    def test_code_upper_cased(self):
        assert Country(code="us", name="United States").code == "US"

    @pytest.mark.parametrize("code", ["USA", "U", "1A", ""])
    def test_bad_code_rejected(self, code):
        with pytest.raises(ValidationError):
            Country(code=code, name="x")

    def test_frozen(self):
        c = Country(code="DE", name="Germany")
        with pytest.raises(ValidationError):
            c.name = "Deutschland"


class TestBook:
    def test_isbn_hyphens_stripped(self):
        b = Book(isbn13="978-0-00-000000-1", title="T", author="A")
        assert b.isbn13 == "9780000000001"

    def test_bad_isbn_rejected(self):
        with pytest.raises(ValidationError):
            Book(isbn13="12345", title="T", author="A")

    def test_retail_price_applies_margin(self):
        b = Book(isbn13="9780000000001", title="T", author="A",
                 purchase_price=Money.of("20.00"))
        assert b.retail_price == Money.of("22.20")

    def test_hashable(self):
        b = Book(isbn13="9780000000001", title="T", author="A")
        assert b in {b}


class TestShopAndCustomer:
    def test_shop_country_normalized(self):
        assert Shop(name="S", country_code="de").country_code == "DE"

    def test_customer_bad_country_rejected(self):
        with pytest.raises(ValidationError):
            Customer(id="c", name="n", country_code="Germany")
