"""Normalization helpers shared by distributor adapters."""

import json
import math
from decimal import Decimal, InvalidOperation
from typing import Any, List, Tuple

from tastebuddy.core.exceptions import FieldParseError


def decode_json(body: bytes) -> Any:
    """Decode a JSON body keeping every fractional number as Decimal.

    Raises:
        ValueError: If body is not valid UTF-8 JSON
    """
    return json.loads(body, parse_float=Decimal)


class CoordinateParser:
    """Parse loosely typed coordinate values into floats."""

    DEFAULT = 0.0

    @staticmethod
    def parse(field: str, value: Any) -> float:
        """Parse a latitude or longitude.

        Accepts numbers and numeric strings (surrounding whitespace allowed).
        A decimal comma such as "52,5" is rejected.

        Args:
            field: Field name, used in the error
            value: Raw source value

        Returns:
            Parsed float

        Raises:
            FieldParseError: If the value is missing, non-numeric or not finite
        """
        if isinstance(value, bool) or value is None:
            raise FieldParseError(field, value, "not a number")

        if isinstance(value, (int, float, Decimal)):
            result = float(value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                raise FieldParseError(field, value, "empty string")
            try:
                result = float(text)
            except ValueError:
                raise FieldParseError(field, value, "not a number")
        else:
            raise FieldParseError(field, value, f"unexpected type {type(value).__name__}")

        if not math.isfinite(result):
            raise FieldParseError(field, value, "not a finite number")
        return result


class PriceFormatter:
    """Encode prices as canonical decimal strings."""

    @staticmethod
    def to_decimal(value: Any) -> Decimal:
        """Convert a decoded price to Decimal without passing through float.

        Adapters pass the Decimal produced by decode_json(). Floats from
        callers that already hold one are converted through repr() so 0.99
        stays 0.99.

        Raises:
            ValueError: If value is not a finite number
        """
        if isinstance(value, bool):
            raise ValueError(f"price must be a number, got {value!r}")
        if isinstance(value, float):
            value = repr(value)
        try:
            price = Decimal(value)
        except (InvalidOperation, TypeError):
            raise ValueError(f"price must be a number, got {value!r}")
        if not price.is_finite():
            raise ValueError(f"price must be finite, got {value!r}")
        return price

    @classmethod
    def format(cls, value: Any) -> str:
        """Format a price as a plain decimal string.

        Keeps exactly the digits the source supplied: no rounding, no padding
        and no scientific notation.

        Examples:
            >>> PriceFormatter.format(Decimal("0.99"))
            '0.99'
            >>> PriceFormatter.format(1)
            '1'
            >>> PriceFormatter.format(Decimal("1E+2"))
            '100'
        """
        return format(cls.to_decimal(value), "f")


def parse_coordinates(lat: Any, lon: Any) -> Tuple[float, float, List[FieldParseError]]:
    """Parse a latitude/longitude pair independently.

    A field that fails to parse becomes CoordinateParser.DEFAULT and its
    error is returned so the caller can log it.

    Returns:
        (latitude, longitude, errors)
    """
    errors: List[FieldParseError] = []
    values = []
    for name, raw in (("latitude", lat), ("longitude", lon)):
        try:
            values.append(CoordinateParser.parse(name, raw))
        except FieldParseError as e:
            errors.append(e)
            values.append(CoordinateParser.DEFAULT)
    return values[0], values[1], errors


def seed_tags(distributor: str, city: str) -> List[str]:
    """Initial tags of every discount: the distributor key and the city."""
    return [distributor, city]
