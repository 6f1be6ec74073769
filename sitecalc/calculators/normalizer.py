"""
Input Normalizer: raw form text to canonical numbers.

Parsing never raises. Empty, missing or non-numeric text reads as 0, a leading
number followed by junk ("12 mm") keeps the number, and anything that parses to
a non-finite value is treated as 0. Unit conversion (mm -> m) runs after parsing.
"""

import logging
import math
import re
from typing import Dict, Iterable, Mapping, Optional

from .base import FieldSchema
from .results import NormalizedInput

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value, default: float = 0.0) -> float:
    """Parse a numeric value from user input."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return default
        try:
            number = float(match.group(1))
        except (ValueError, OverflowError):
            return default
    if not math.isfinite(number):
        return default
    return number


def display_text(value) -> str:
    """What the detail view echoes back for an input: the typed text, or "0" when blank."""
    if value is None:
        return "0"
    text = str(value).strip()
    return text if text else "0"


def normalize(raw: Optional[Mapping[str, object]], schema: Iterable[FieldSchema]) -> NormalizedInput:
    """Parse every schema field out of the raw input map and convert units."""
    raw = raw or {}
    values: Dict[str, float] = {}
    display: Dict[str, str] = {}
    for schema_field in schema:
        raw_value = raw.get(schema_field.name)
        parsed = parse_number(raw_value)
        values[schema_field.name] = schema_field.convert(parsed)
        display[schema_field.name] = display_text(raw_value)
    return NormalizedInput(values=values, display=display)


def normalize_prices(prices: Optional[Mapping[str, object]], price_fields: Iterable[str]) -> Dict[str, float]:
    """
    Keep only the prices a calculator declares, parsed to floats.

    A price the caller did not send stays absent (not 0) so the cost composer
    can tell "no price" from "free".
    """
    prices = prices or {}
    out: Dict[str, float] = {}
    for name in price_fields:
        if name in prices and prices[name] not in (None, ""):
            out[name] = parse_number(prices[name])
    ignored = set(prices) - set(out)
    if ignored:
        logger.debug("Ignoring prices not used by this calculator: %s", sorted(ignored))
    return out


def price_display(prices: Optional[Mapping[str, object]], price_fields: Iterable[str]) -> Dict[str, str]:
    """Price text as the caller sent it, for the prices normalize_prices() keeps."""
    prices = prices or {}
    out: Dict[str, str] = {}
    for name in price_fields:
        value = prices.get(name)
        if value in (None, ""):
            continue
        if isinstance(value, float) and value.is_integer():
            out[name] = str(int(value))
        else:
            out[name] = display_text(value)
    return out
