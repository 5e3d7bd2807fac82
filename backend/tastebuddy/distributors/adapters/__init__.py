"""Distributor-specific adapter implementations.

Each adapter module implements a class that inherits from
BaseDistributorAdapter and is listed in register_adapters.
"""

from .edeka import EdekaAdapter

__all__ = [
    "EdekaAdapter",
]
