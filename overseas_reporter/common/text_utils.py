"""
Text Utilities

Normalization and field parsers shared by every extraction tier.
All functions are pure and return None for "no value" instead of raising.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

CURRENCY_SYMBOL = "$"

MAX_NAME_LENGTH = 80

# "$20,000,000", "$ 1.1m", "$950k"; the suffix must not start a longer word
MONEY_PATTERN = re.compile(
    r'\$\s*(\d[\d,]*(?:\.\d+)?)(?:([kmb])(?![a-z]))?',
    re.IGNORECASE,
)

DIGIT_RUN_PATTERN = re.compile(r'\d[\d,]*')

_MAGNITUDES = {
    'k': Decimal(1_000),
    'm': Decimal(1_000_000),
    'b': Decimal(1_000_000_000),
}


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def parse_money(text: Optional[str]) -> Optional[int]:
    """
    Parse the first currency-marked amount in text.

    Grouping commas are stripped and a trailing k/m/b magnitude suffix is
    applied. The result is rounded half-up to an integer.

    Args:
        text: Free text that may contain a price ("Cost: $1.1m")

    Returns:
        Amount as integer, or None if no currency-marked token is present
    """
    if not text:
        return None

    match = MONEY_PATTERN.search(text)
    if not match:
        return None

    digits = match.group(1).replace(',', '')
    try:
        amount = Decimal(digits)
    except InvalidOperation:
        return None

    suffix = match.group(2)
    if suffix:
        amount *= _MAGNITUDES[suffix.lower()]

    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_integer(text: Optional[str]) -> Optional[int]:
    """
    Parse the first digit run in text, ignoring grouping commas.

    Returns:
        Integer value, or None on empty/invalid input
    """
    if not text:
        return None

    match = DIGIT_RUN_PATTERN.search(text)
    if not match:
        return None

    digits = match.group(0).replace(',', '')
    return int(digits) if digits else None


def parse_trailing_integer(text: Optional[str]) -> Optional[int]:
    """
    Parse the last digit run in text.

    Stock cells often carry a screen-reader prefix ("Stock: 1,234"), so the
    value is the trailing number rather than the first one.
    """
    if not text:
        return None

    runs = DIGIT_RUN_PATTERN.findall(text)
    if not runs:
        return None

    digits = runs[-1].replace(',', '')
    return int(digits) if digits else None


def strip_money(text: str) -> str:
    """Remove every currency-marked amount from text."""
    return normalize_text(MONEY_PATTERN.sub(' ', text or ""))


def is_plausible_name(text: Optional[str]) -> bool:
    """
    Check whether text can be an item name.

    Rejects empty text, text over 80 characters, currency-prefixed text,
    purely numeric/punctuation text and text without any letter.
    """
    name = normalize_text(text)
    if not name:
        return False
    if len(name) > MAX_NAME_LENGTH:
        return False
    if name.startswith(CURRENCY_SYMBOL):
        return False
    if re.fullmatch(r'[\d\W_]+', name):
        return False
    return re.search(r'[^\W\d_]', name) is not None
