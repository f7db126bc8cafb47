"""Convert byte counts to short human-readable strings and back."""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from enum import IntEnum
from typing import Tuple, Union

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

# Byte counts are stored in signed 64-bit columns by consumers.
MAX_BYTE_COUNT = 2**63 - 1

_SIZE_RE = re.compile(r"^\s*(?P<number>\d+(?:\.\d+)?)\s*(?P<unit>.*?)\s*$", re.ASCII)


class InvalidFormatError(ValueError):
    """Raised when a size string cannot be turned into a byte count."""


class ByteUnit(IntEnum):
    """Binary size units; the value is the power of 1024."""

    B = 0
    K = 1
    M = 2
    G = 3
    T = 4
    P = 5
    E = 6

    @property
    def multiplier(self) -> int:
        return 1024 ** int(self)

    @property
    def symbol(self) -> str:
        return self.name


# Rows of (threshold, symbol) checked from the top; the first threshold not
# larger than the count wins.  Counts of 1 KiB up to 1 MiB are labelled "B"
# (1024 -> "1.0 B") and there is no "K" row.  Existing reports depend on this.
FORMAT_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (ByteUnit.E.multiplier, ByteUnit.E.symbol),
    (ByteUnit.P.multiplier, ByteUnit.P.symbol),
    (ByteUnit.T.multiplier, ByteUnit.T.symbol),
    (ByteUnit.G.multiplier, ByteUnit.G.symbol),
    (ByteUnit.M.multiplier, ByteUnit.M.symbol),
    (ByteUnit.K.multiplier, ByteUnit.B.symbol),
)


def format_byte_count(byte_count: int, locale: Union[str, Locale] = DEFAULT_LOCALE) -> str:
    """Render ``byte_count`` as e.g. ``"4.0 M"``.

    The number always has exactly one fractional digit, rounded half up, and
    uses the decimal separator of ``locale`` (``"4,0 M"`` for ``de_DE``).
    Counts below 1024 fall into the smallest row, so ``512`` renders as
    ``"0.5 B"``.

    Raises:
        ValueError: ``byte_count`` is negative or ``locale`` is unknown.
    """
    if byte_count < 0:
        raise ValueError(f"Byte count must not be negative: {byte_count}")

    threshold, symbol = FORMAT_THRESHOLDS[-1]
    for row_threshold, row_symbol in FORMAT_THRESHOLDS:
        if byte_count >= row_threshold:
            threshold, symbol = row_threshold, row_symbol
            break

    # Ties round up: 1280 -> "1.3 B".
    quotient = (Decimal(byte_count) / Decimal(threshold)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    try:
        number = format_decimal(quotient, format="0.0", locale=locale)
    except UnknownLocaleError as err:
        raise ValueError(f"Unknown locale: {locale}") from err
    return f"{number} {symbol}"


def parse_byte_count(text: str) -> int:
    """Turn a size such as ``"4M"`` or ``"1024B"`` into a number of bytes.

    The number is followed by exactly one case-sensitive unit symbol from
    :class:`ByteUnit`.  A fractional part (``"4.5 M"``) is accepted so that the
    output of :func:`format_byte_count` can be read back; the result is
    truncated to whole bytes.

    Raises:
        InvalidFormatError: no leading number, a missing or unknown unit, or a
            result that does not fit in a signed 64-bit integer.
    """
    if not isinstance(text, str):
        raise InvalidFormatError(f"Size must be text, not {type(text).__name__}")

    match = _SIZE_RE.match(text)
    if match is None:
        raise InvalidFormatError(f"Size does not start with a number: {text!r}")

    symbol = match.group("unit")
    if symbol not in ByteUnit.__members__:
        raise InvalidFormatError(f"Unknown size unit {symbol!r} in {text!r}")
    unit = ByteUnit[symbol]

    byte_count = int(Decimal(match.group("number")) * unit.multiplier)
    if byte_count > MAX_BYTE_COUNT:
        raise InvalidFormatError(f"Size is too large: {text!r}")
    logger.debug("Parsed %r as %d bytes", text, byte_count)
    return byte_count


__all__ = [
    "ByteUnit",
    "DEFAULT_LOCALE",
    "FORMAT_THRESHOLDS",
    "InvalidFormatError",
    "MAX_BYTE_COUNT",
    "format_byte_count",
    "parse_byte_count",
]
