"""Market and Discount Pydantic schemas for downstream consumers.

Field names are camelCase on the wire (distributorSpecificMarketId,
zipCode, imageUrl, ...).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tastebuddy.distributors.base import Discount, Market


class CamelModel(BaseModel):
    """Base schema serializing to camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CoordinatesSchema(CamelModel):
    latitude: float
    longitude: float


class MarketLocationSchema(CamelModel):
    coordinates: CoordinatesSchema
    city: str
    street: str
    zip_code: str


class MarketSchema(CamelModel):
    """Canonical market as exchanged with storage and display."""

    id: Optional[str] = None
    distributor: str
    distributor_specific_market_id: str
    market_name: str
    location: MarketLocationSchema

    @classmethod
    def from_market(cls, market: Market) -> "MarketSchema":
        return cls.model_validate(market)


class DiscountSchema(CamelModel):
    """Canonical discount as exchanged with storage and display."""

    price: str
    title: str
    image_url: str
    valid_until: int
    market_name: str
    internal_market_id: Optional[str] = None
    tags: List[str]

    @classmethod
    def from_discount(cls, discount: Discount) -> "DiscountSchema":
        return cls.model_validate(discount)
