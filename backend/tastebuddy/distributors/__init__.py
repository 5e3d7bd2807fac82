"""Distributor integrations for grocery-chain market and offer APIs.

This package provides:
- Canonical Market and Discount records
- The base adapter interface and one adapter per distributor
- The HTTP fetcher used by adapters
- The registry resolving distributor keys to adapters
"""

from .base import (
    BaseDistributorAdapter,
    Coordinates,
    Discount,
    Market,
    MarketLocation,
)
from .fetcher import Fetcher, HttpFetcher
from .registry import DistributorRegistry
from .register_adapters import build_default_registry

__all__ = [
    # Base classes
    "BaseDistributorAdapter",
    # Data structures
    "Coordinates",
    "Discount",
    "Market",
    "MarketLocation",
    # Transport
    "Fetcher",
    "HttpFetcher",
    # Registry
    "DistributorRegistry",
    "build_default_registry",
]
