"""Distributor utilities for response decoding and field normalization."""

from .normalizer import (
    CoordinateParser,
    PriceFormatter,
    decode_json,
    parse_coordinates,
    seed_tags,
)


__all__ = [
    "CoordinateParser",
    "PriceFormatter",
    "decode_json",
    "parse_coordinates",
    "seed_tags",
]
