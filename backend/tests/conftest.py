"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List, Tuple, Union

import httpx
import pytest

from tastebuddy.core.exceptions import TransportError
from tastebuddy.core.log import configure_logging
from tastebuddy.distributors.adapters.edeka import EdekaAdapter
from tastebuddy.distributors.base import Coordinates, Market, MarketLocation


MARKETS_URL = "https://edeka.test/api/marketsearch/markets"
OFFERS_URL = "https://edeka.test/eh/service/eh/offers"


def markets_url(city: str) -> str:
    return str(httpx.URL(MARKETS_URL, params={"searchstring": city}))


def offers_url(market_id: str) -> str:
    return str(httpx.URL(OFFERS_URL, params={"marketId": market_id}))


class FakeFetcher:
    """Fetcher serving canned bodies (or raising canned errors) per URL."""

    def __init__(self, responses: Dict[str, Union[bytes, Exception]] = None):
        self.responses = dict(responses or {})
        self.calls: List[str] = []

    def add(self, url: str, body: Union[bytes, str, dict, Exception]) -> None:
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.responses[url] = body

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.responses:
            raise TransportError(url, "Not Found", status_code=404)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def __aenter__(self) -> "FakeFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        pass


class RecordingSink:
    """Log sink remembering every event."""

    def __init__(self):
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def warning(self, event: str, **kw: Any) -> None:
        self.events.append(("warning", event, kw))

    def error(self, event: str, **kw: Any) -> None:
        self.events.append(("error", event, kw))

    def by_level(self, level: str) -> List[Tuple[str, Dict[str, Any]]]:
        return [(event, kw) for lvl, event, kw in self.events if lvl == level]


def edeka_market_entry(
    market_id: int,
    name: str,
    city: str,
    zip_code: str,
    street: str,
    lat: Any = "52.5200",
    lon: Any = "13.4050",
) -> Dict[str, Any]:
    """Build one entry of the EDEKA market search response."""
    return {
        "id": market_id,
        "name": name,
        "contact": {
            "address": {
                "city": {"name": city, "zipCode": zip_code},
                "street": street,
            }
        },
        "coordinates": {"lat": lat, "lon": lon},
    }


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Send structlog output to stderr and keep it to warnings."""
    configure_logging(level="WARNING", json_logs=False)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def edeka(fetcher: FakeFetcher, sink: RecordingSink) -> EdekaAdapter:
    """EDEKA adapter wired to the fake fetcher and recording sink."""
    return EdekaAdapter(fetcher, sink, markets_url=MARKETS_URL, offers_url=OFFERS_URL)


@pytest.fixture
def berlin_search() -> Dict[str, Any]:
    return {
        "totalCount": 2,
        "markets": [
            edeka_market_entry(
                8001, "EDEKA Mitte", "Berlin", "10115", "Invalidenstraße 1",
                lat="52.5311", lon="13.3847",
            ),
            edeka_market_entry(
                8002, "EDEKA Kreuzberg", "Berlin", "10997", "Oranienstraße 20",
                lat="52.5003", lon="13.4246",
            ),
        ],
    }


@pytest.fixture
def hamburg_search() -> Dict[str, Any]:
    return {
        "totalCount": 1,
        "markets": [
            edeka_market_entry(
                9001, "EDEKA Altona", "Hamburg", "22765", "Große Bergstraße 5",
                lat="53.5511", lon="9.9350",
            ),
        ],
    }


@pytest.fixture
def offers_payload() -> str:
    # Raw text so the price digits reach the decoder untouched
    return """{
        "docs": [
            {"preis": 0.99, "titel": "Bananen", "bild_app": "https://img.test/bananen.jpg", "gueltig_bis": 1735603200},
            {"preis": 2.49, "titel": "Vollmilch 1L", "bild_app": "https://img.test/milch.jpg", "gueltig_bis": 1735603200},
            {"preis": 10, "titel": "Kaffee 500g", "bild_app": "https://img.test/kaffee.jpg", "gueltig_bis": 1735689600}
        ]
    }"""


@pytest.fixture
def berlin_market() -> Market:
    return Market(
        distributor="edeka",
        distributor_specific_market_id="8001",
        market_name="EDEKA Mitte",
        location=MarketLocation(
            coordinates=Coordinates(latitude=52.5311, longitude=13.3847),
            city="Berlin",
            street="Invalidenstraße 1",
            zip_code="10115",
        ),
    )
