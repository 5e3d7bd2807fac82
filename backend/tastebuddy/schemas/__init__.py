"""Pydantic schemas for canonical distributor records."""

from tastebuddy.schemas.distributor import (
    CoordinatesSchema,
    DiscountSchema,
    MarketLocationSchema,
    MarketSchema,
)

__all__ = [
    "CoordinatesSchema",
    "DiscountSchema",
    "MarketLocationSchema",
    "MarketSchema",
]
