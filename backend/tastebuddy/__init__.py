"""TasteBuddy distributor integrations.

Adapters for grocery-chain APIs that normalize market and offer listings
into canonical Market and Discount records.
"""

__version__ = "1.0.0"
