"""Fan-out over distributors and markets with per-source failure isolation.

One adapter call runs per (distributor, city) or per market. A failing
source is recorded in the result and never affects the others.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, Sequence, TypeVar

import structlog

from tastebuddy.core.exceptions import DistributorError
from tastebuddy.distributors.base import Discount, Market
from tastebuddy.distributors.registry import DistributorRegistry

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class SourceError:
    """A failed source: which distributor, what was asked, and why it failed."""

    distributor: str
    source: str  # City or market id the call was made for
    error: DistributorError


@dataclass
class CollectionResult(Generic[T]):
    """Records from every successful source plus the errors of failed ones."""

    items: List[T] = field(default_factory=list)
    errors: List[SourceError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class CollectionService:
    """Query several distributors or markets concurrently."""

    def __init__(self, registry: DistributorRegistry):
        """Initialize collection service.

        Args:
            registry: Registry used to resolve adapters
        """
        self.registry = registry
        self.logger = logger.bind(service="collection_service")

    async def collect_markets(
        self, city: str, distributors: Optional[Iterable[str]] = None
    ) -> CollectionResult[Market]:
        """List markets of a city across distributors.

        Args:
            city: City search string
            distributors: Distributor keys to query, defaults to all registered

        Returns:
            CollectionResult with markets grouped by distributor in query order
        """
        keys = list(distributors) if distributors is not None else self.registry.keys()
        self.logger.info("collecting_markets", city=city, distributors=keys)

        calls = [
            (key, city, self._list_markets(key, city))
            for key in keys
        ]
        result = await self._gather(calls)

        self.logger.info(
            "markets_collected",
            city=city,
            markets=len(result.items),
            failed_sources=len(result.errors),
        )
        return result

    async def collect_discounts(self, markets: Sequence[Market]) -> CollectionResult[Discount]:
        """List current discounts of every given market.

        Args:
            markets: Markets as returned by list_markets()

        Returns:
            CollectionResult with discounts grouped by market in input order
        """
        self.logger.info("collecting_discounts", markets=len(markets))

        calls = [
            (market.distributor, market.distributor_specific_market_id, self._list_discounts(market))
            for market in markets
        ]
        result = await self._gather(calls)

        self.logger.info(
            "discounts_collected",
            discounts=len(result.items),
            failed_sources=len(result.errors),
        )
        return result

    async def _list_markets(self, key: str, city: str) -> List[Market]:
        adapter = self.registry.get(key)
        return await adapter.list_markets(city)

    async def _list_discounts(self, market: Market) -> List[Discount]:
        adapter = self.registry.get(market.distributor)
        return await adapter.list_discounts(market)

    async def _gather(self, calls: List[tuple]) -> CollectionResult:
        """Await all calls concurrently and split results from failures.

        Only DistributorError is recorded per source; anything else is a bug
        and propagates once all calls have settled.
        """
        outcomes = await asyncio.gather(
            *(coro for _, _, coro in calls), return_exceptions=True
        )

        result = CollectionResult()
        unexpected: Optional[BaseException] = None
        for (key, source, _), outcome in zip(calls, outcomes):
            if isinstance(outcome, DistributorError):
                self.logger.warning(
                    "source_failed",
                    distributor=key,
                    source=source,
                    error=str(outcome),
                )
                result.errors.append(SourceError(distributor=key, source=source, error=outcome))
            elif isinstance(outcome, BaseException):
                unexpected = unexpected or outcome
            else:
                result.items.extend(outcome)

        if unexpected is not None:
            raise unexpected
        return result
