"""Manual distributor runner for testing and debugging adapters.

Lists the markets of a city and, optionally, the current discounts of the
first markets found.

Usage:
    tastebuddy-distributors --city Berlin
    tastebuddy-distributors --city Berlin --distributor edeka --discounts
    tastebuddy-distributors --city Berlin --json
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from tastebuddy.core.log import configure_logging
from tastebuddy.distributors.base import Discount, Market
from tastebuddy.distributors.fetcher import HttpFetcher
from tastebuddy.distributors.register_adapters import build_default_registry
from tastebuddy.schemas.distributor import DiscountSchema, MarketSchema
from tastebuddy.services.collection_service import CollectionResult, CollectionService


async def run(
    city: str,
    distributors: Optional[List[str]] = None,
    discounts: bool = False,
    limit: int = 5,
    as_json: bool = False,
) -> int:
    """Collect markets (and discounts) and print them.

    Returns:
        Process exit code: 0 if every source succeeded, 1 otherwise
    """
    async with HttpFetcher() as fetcher:
        service = CollectionService(build_default_registry(fetcher))

        markets = await service.collect_markets(city, distributors)
        offers: CollectionResult[Discount] = CollectionResult()
        if discounts and markets.items:
            offers = await service.collect_discounts(markets.items[:limit])

    if as_json:
        payload = {
            "markets": [
                MarketSchema.from_market(m).model_dump(by_alias=True) for m in markets.items
            ],
            "discounts": [
                DiscountSchema.from_discount(d).model_dump(by_alias=True) for d in offers.items
            ],
            "errors": [
                {"distributor": e.distributor, "source": e.source, "error": str(e.error)}
                for e in markets.errors + offers.errors
            ],
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_markets(city, markets.items)
        if discounts:
            _print_discounts(offers.items)
        _print_errors(markets, offers)

    return 0 if markets.ok and offers.ok else 1


def _print_markets(city: str, markets: List[Market]) -> None:
    print(f"\n{'='*70}")
    print(f"  Markets in {city}: {len(markets)}")
    print(f"{'='*70}\n")

    for i, market in enumerate(markets, 1):
        location = market.location
        print(f"[{i}] {market.market_name} ({market.distributor} #{market.distributor_specific_market_id})")
        print(f"    {location.street}, {location.zip_code} {location.city}")
        print(f"    lat={location.coordinates.latitude} lon={location.coordinates.longitude}")
        print()


def _print_discounts(discounts: List[Discount]) -> None:
    print(f"{'='*70}")
    print(f"  Discounts: {len(discounts)}")
    print(f"{'='*70}\n")

    for discount in discounts:
        print(f"  {discount.price:>8}  {discount.title}  [{discount.market_name}]")
    print()


def _print_errors(*results: CollectionResult) -> None:
    errors = [e for result in results for e in result.errors]
    if not errors:
        return

    print(f"Failed sources: {len(errors)}", file=sys.stderr)
    for error in errors:
        print(f"  {error.distributor} ({error.source}): {error.error}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the distributors."""
    parser = argparse.ArgumentParser(
        description="List markets and discounts of grocery distributors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tastebuddy-distributors --city Berlin
  tastebuddy-distributors --city Berlin --distributor edeka --discounts
  tastebuddy-distributors --city Hamburg --json
        """,
    )

    parser.add_argument(
        "--city",
        required=True,
        help="City to search markets in (e.g., 'Berlin')",
    )

    parser.add_argument(
        "--distributor",
        action="append",
        dest="distributors",
        help="Distributor key, repeatable (default: all registered)",
    )

    parser.add_argument(
        "--discounts",
        action="store_true",
        help="Also list the current discounts of the first markets",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Number of markets to fetch discounts for (default: 5)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print canonical records as JSON",
    )

    args = parser.parse_args(argv)

    configure_logging()

    return asyncio.run(
        run(args.city, args.distributors, args.discounts, args.limit, args.as_json)
    )


if __name__ == "__main__":
    sys.exit(main())
