"""
Display labels for snake_case keys stored in history payloads.

"cement_bags_nos" -> "Cement Bags", "brick_cost_inr" -> "Brick Cost".
Only a single trailing unit token is stripped.
"""

from typing import Optional

# unit token -> how a FormulaResult unit or currency is written in a key suffix
UNIT_TOKENS = ("inr", "nos", "ton", "bags", "liter", "kg", "sqft")

UNIT_SUFFIXES = {
    "nos": "nos",
    "kg": "kg",
    "ton": "ton",
    "bags": "bags",
    "liter": "liter",
    "l": "liter",
    "sqft": "sqft",
    "inr": "inr",
}


def title_from_key(key: str) -> str:
    """Underscores to spaces, first letter of every word upper-cased."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_") if word)


def derive_label(key: str) -> str:
    words = title_from_key(key).split(" ")
    if len(words) > 1 and words[-1].lower() in UNIT_TOKENS:
        words = words[:-1]
    return " ".join(words)


def unit_from_key(key: str) -> str:
    """Unit column for a stored key: its trailing unit token, capitalized, or ''."""
    token = key.rsplit("_", 1)[-1]
    if "_" in key and token.lower() in UNIT_TOKENS:
        return token[:1].upper() + token[1:]
    return ""


def unit_suffix(unit: str) -> Optional[str]:
    """Key suffix for a FormulaResult unit, None when the unit has no token (m3, m, sq.m.)."""
    return UNIT_SUFFIXES.get((unit or "").strip().lower())


def storage_key(key: str, unit: str) -> str:
    """Key under which a quantity is stored: cement_bags + NOS -> cement_bags_nos."""
    suffix = unit_suffix(unit)
    if suffix is None or key.endswith(f"_{suffix}"):
        return key
    return f"{key}_{suffix}"


def cost_storage_key(key: str, currency: str) -> str:
    """
    brick_cost + INR -> brick_cost_inr

    A currency with no unit token (USD, EUR) leaves the key bare so the label
    rule still reads it back as "Brick Cost".
    """
    suffix = (currency or "").strip().lower()
    if suffix not in UNIT_TOKENS or key.endswith(f"_{suffix}"):
        return key
    return f"{key}_{suffix}"
