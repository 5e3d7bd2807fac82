"""Canonical records and the distributor adapter interface.

Every distributor adapter turns its chain's ad-hoc JSON into the Market and
Discount records defined here. Adapters inherit from BaseDistributorAdapter
and implement list_markets() and list_discounts().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from tastebuddy.core.log import LogSink, get_sink
from tastebuddy.distributors.fetcher import Fetcher


@dataclass
class Coordinates:
    """Geographic position of a market. (0, 0) means the source was unparsable."""

    latitude: float = 0.0
    longitude: float = 0.0


@dataclass
class MarketLocation:
    """Postal address and position of a market."""

    coordinates: Coordinates
    city: str
    street: str = ""
    zip_code: str = ""


@dataclass
class Market:
    """A physical store of one distributor."""

    distributor: str
    distributor_specific_market_id: str  # Join key for list_discounts()
    market_name: str
    location: MarketLocation
    id: Optional[str] = None  # Assigned by the storage layer, never by adapters

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.distributor:
            raise ValueError("distributor is required")
        if not self.distributor_specific_market_id:
            raise ValueError("distributor_specific_market_id is required")


@dataclass
class Discount:
    """A current promotional offer of one market."""

    price: str  # Decimal string, e.g. "0.99"
    title: str
    image_url: str
    valid_until: int
    market_name: str
    internal_market_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)


class BaseDistributorAdapter(ABC):
    """Abstract base class for all distributor adapters.

    Adapters receive the fetcher and the log sink at construction. They keep
    no state between calls, so one instance can serve concurrent calls.
    """

    distributor: str = ""  # Must be overridden in subclass (e.g., "edeka")
    distributor_name: str = ""  # Display name (e.g., "EDEKA")

    def __init__(self, fetcher: Fetcher, sink: Optional[LogSink] = None):
        """Initialize the adapter.

        Args:
            fetcher: Transport used for every GET request
            sink: Log sink for warnings and errors, defaults to structlog
        """
        if not self.distributor:
            raise ValueError(f"{type(self).__name__} must define a distributor key")
        self.fetcher = fetcher
        self.logger = sink if sink is not None else get_sink(distributor=self.distributor)

    @abstractmethod
    async def list_markets(self, city: str) -> List[Market]:
        """List the distributor's markets matching a city query.

        Args:
            city: City search string; copied into every market's location

        Returns:
            One Market per source entry, in source order

        Raises:
            TransportError: If the request fails
            DecodeError: If the response has an unexpected shape
        """
        pass

    @abstractmethod
    async def list_discounts(self, market: Market) -> List[Discount]:
        """List the current discounts of a market.

        Args:
            market: Market previously returned by list_markets()

        Returns:
            The full current set of discounts for this market

        Raises:
            TransportError: If the request fails
            DecodeError: If the response has an unexpected shape
        """
        pass
