"""Master data entities referenced by purchases.

These are owned by the :class:`~bookstore_analytics.catalog.registry.Catalog`.
Purchases hold them as immutable references and only read their
identifiers and country codes; nothing in the analytics engine mutates them.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from .money import Money, retail_price


def _normalize_country_code(v: str) -> str:
    code = v.strip().upper()
    if len(code) != 2 or not code.isalpha():
        raise ValueError(f"Country code must be ISO 3166 alpha-2, got '{v}'")
    return code


class Country(BaseModel):
    """A country, identified by its ISO 3166 alpha-2 code."""

    model_config = {"frozen": True}

    code: str  # "US", "DE", ...
    name: str

    @field_validator("code")
    @classmethod
    def code_must_be_alpha2(cls, v: str) -> str:
        return _normalize_country_code(v)


class Book(BaseModel):
    """A book in the catalog. ``isbn13`` is its identifier."""

    model_config = {"frozen": True}

    isbn13: str
    title: str
    author: str
    publisher: str = ""
    purchase_price: Money = Money.zero()

    @field_validator("isbn13")
    @classmethod
    def isbn_must_be_13_digits(cls, v: str) -> str:
        digits = v.replace("-", "")
        if len(digits) != 13 or not digits.isdigit():
            raise ValueError(f"isbn13 must have 13 digits, got '{v}'")
        return digits

    @property
    def retail_price(self) -> Money:
        return retail_price(self.purchase_price)


class Shop(BaseModel):
    """A physical shop. Shops are keyed by name."""

    model_config = {"frozen": True}

    name: str
    city: str = ""
    country_code: str

    @field_validator("country_code")
    @classmethod
    def country_code_must_be_alpha2(cls, v: str) -> str:
        return _normalize_country_code(v)


class Employee(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    shop_name: str = ""


class Customer(BaseModel):
    model_config = {"frozen": True}

    id: str
    name: str
    city: str = ""
    country_code: str

    @field_validator("country_code")
    @classmethod
    def country_code_must_be_alpha2(cls, v: str) -> str:
        return _normalize_country_code(v)
