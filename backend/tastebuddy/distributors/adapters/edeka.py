"""EDEKA market search and offers adapter.

Markets: GET {EDEKA_MARKETS_URL}?searchstring=<city>
Offers:  GET {EDEKA_OFFERS_URL}?marketId=<market id>
"""

from decimal import Decimal
from typing import Any, List, Optional

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from tastebuddy.config import settings
from tastebuddy.core.exceptions import DecodeError, TransportError
from tastebuddy.core.log import LogSink
from tastebuddy.distributors.base import (
    BaseDistributorAdapter,
    Coordinates,
    Discount,
    Market,
    MarketLocation,
)
from tastebuddy.distributors.fetcher import Fetcher
from tastebuddy.distributors.utils.normalizer import (
    PriceFormatter,
    decode_json,
    parse_coordinates,
    seed_tags,
)


logger = structlog.get_logger(__name__)


# Raw response shapes. Missing or null fields fall back to their defaults,
# missing containers ("markets", "docs", a market's "id") fail the batch.

class _EdekaModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # EDEKA sends null for absent values; treat them like missing keys
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class EdekaCity(_EdekaModel):
    name: str = ""
    zip_code: str = Field("", alias="zipCode")


class EdekaAddress(_EdekaModel):
    city: EdekaCity = Field(default_factory=EdekaCity)
    street: str = ""


class EdekaContact(_EdekaModel):
    address: EdekaAddress = Field(default_factory=EdekaAddress)


class EdekaCoordinates(_EdekaModel):
    # Published as strings; parsed per field later
    lat: Any = None
    lon: Any = None


class EdekaMarket(_EdekaModel):
    id: int
    name: str = ""
    contact: EdekaContact = Field(default_factory=EdekaContact)
    coordinates: EdekaCoordinates = Field(default_factory=EdekaCoordinates)


class EdekaMarketSearch(_EdekaModel):
    total_count: Optional[int] = Field(None, alias="totalCount")
    markets: List[EdekaMarket]


class EdekaOffer(_EdekaModel):
    price: Decimal = Field(Decimal("0"), alias="preis")
    title: str = Field("", alias="titel")
    image_url: str = Field("", alias="bild_app")
    valid_until: int = Field(0, alias="gueltig_bis")


class EdekaOffers(_EdekaModel):
    docs: List[EdekaOffer]


class EdekaAdapter(BaseDistributorAdapter):
    """EDEKA adapter.

    EDEKA publishes coordinates as strings, so they are parsed per field with
    a (0, 0) fallback. Offer prices are decoded straight into Decimal.
    """

    distributor = "edeka"
    distributor_name = "EDEKA"

    def __init__(
        self,
        fetcher: Fetcher,
        sink: Optional[LogSink] = None,
        markets_url: Optional[str] = None,
        offers_url: Optional[str] = None,
    ):
        super().__init__(fetcher, sink)
        self.markets_url = markets_url or settings.EDEKA_MARKETS_URL
        self.offers_url = offers_url or settings.EDEKA_OFFERS_URL

    async def list_markets(self, city: str) -> List[Market]:
        """List EDEKA markets for a city.

        Args:
            city: City search string

        Returns:
            List of Market objects in the order EDEKA returned them
        """
        operation = "list_markets"
        url = str(httpx.URL(self.markets_url, params={"searchstring": city}))
        body = await self._get(operation, url)

        try:
            search = EdekaMarketSearch.model_validate(decode_json(body))
        except (ValueError, ValidationError) as e:
            self.logger.error(
                "edeka_decode_failed", operation=operation, city=city, error=str(e)
            )
            raise DecodeError(self.distributor, operation, str(e)) from e

        if search.total_count is not None and search.total_count != len(search.markets):
            logger.debug(
                "edeka_market_count_mismatch",
                city=city,
                total_count=search.total_count,
                received=len(search.markets),
            )

        markets = [self._normalize_market(entry, city) for entry in search.markets]

        logger.info("edeka_markets_fetched", city=city, count=len(markets))
        return markets

    async def list_discounts(self, market: Market) -> List[Discount]:
        """List the current EDEKA offers of a market.

        Args:
            market: EDEKA market (uses distributor_specific_market_id)

        Returns:
            List of Discount objects tagged with distributor and city
        """
        operation = "list_discounts"
        market_id = market.distributor_specific_market_id
        url = str(httpx.URL(self.offers_url, params={"marketId": market_id}))
        body = await self._get(operation, url)

        try:
            offers = EdekaOffers.model_validate(decode_json(body))
            prices = [PriceFormatter.format(offer.price) for offer in offers.docs]
        except (ValueError, ValidationError) as e:
            self.logger.error(
                "edeka_decode_failed", operation=operation, market_id=market_id, error=str(e)
            )
            raise DecodeError(self.distributor, operation, str(e)) from e

        discounts = [
            Discount(
                price=price,
                title=offer.title,
                image_url=offer.image_url,
                valid_until=offer.valid_until,
                market_name=market.market_name,
                internal_market_id=market.id,
                tags=seed_tags(market.distributor, market.location.city),
            )
            for offer, price in zip(offers.docs, prices)
        ]

        logger.info("edeka_discounts_fetched", market_id=market_id, count=len(discounts))
        return discounts

    async def _get(self, operation: str, url: str) -> bytes:
        try:
            return await self.fetcher.fetch(url)
        except TransportError as e:
            self.logger.error("edeka_fetch_failed", operation=operation, url=url, error=str(e))
            raise

    def _normalize_market(self, entry: EdekaMarket, city: str) -> Market:
        """Convert one market search entry to a Market.

        Unparsable coordinates are logged and replaced by 0.
        """
        lat, lon, errors = parse_coordinates(entry.coordinates.lat, entry.coordinates.lon)
        for error in errors:
            self.logger.warning(
                "edeka_coordinate_invalid",
                operation="list_markets",
                market_id=entry.id,
                field=error.field,
                value=error.value,
                error=str(error),
            )

        address = entry.contact.address
        return Market(
            distributor=self.distributor,
            distributor_specific_market_id=str(entry.id),
            market_name=entry.name,
            location=MarketLocation(
                coordinates=Coordinates(latitude=lat, longitude=lon),
                city=city,
                street=address.street,
                zip_code=address.city.zip_code,
            ),
        )
