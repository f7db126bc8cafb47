"""Find timestamps embedded in file names.

Exported reports, backups and scans are often named after the moment they were
produced, e.g. ``scan_2021-03-31_120059.pdf`` or ``09-03-20 1122 notes.txt``.
:func:`extract_timestamps` walks an ordered table of known shapes and returns
every timestamp it can recognise.  The table is tried from the most specific
shape to the least specific one, so a date-only pattern never wins over a
longer date-and-time pattern that covers the same text.

All results are naive :class:`datetime.datetime` values in local time with the
microseconds set to zero.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Separators accepted between the date and the time of day.
TIME_SEPARATORS = ("_", " ")


@dataclass(frozen=True)
class DatePattern:
    """One recognisable timestamp shape.

    ``regex`` finds the candidate text inside a file name and ``format`` is the
    :func:`datetime.strptime` format used to read it.
    """

    order: int
    regex: re.Pattern
    format: str

    @property
    def two_digit_year(self) -> bool:
        return "%y" in self.format

    def parse(self, text: str) -> Optional[datetime]:
        """Read ``text`` with this pattern's format, or ``None`` if it is not a real date."""
        try:
            value = datetime.strptime(text, self.format)
        except ValueError:
            return None
        if self.two_digit_year:
            # Two-digit years always land in 2000-2099.
            value = value.replace(year=2000 + value.year % 100)
        return value.replace(microsecond=0)


# (regex, strptime format) families, most specific first.  ``{sep}`` marks the
# place between date and time of day.
_FAMILIES: Tuple[Tuple[str, str], ...] = (
    (r"\d{4}-\d{2}-\d{2}{sep}\d{6}", "%Y-%m-%d{sep}%H%M%S"),
    (r"\d{4}-\d{2}-\d{2}{sep}\d{4}", "%Y-%m-%d{sep}%H%M"),
    (r"\d{4}-\d{2}-\d{2}", "%Y-%m-%d"),
    (r"\d{8}{sep}\d{6}", "%Y%m%d{sep}%H%M%S"),
    (r"\d{8}{sep}\d{4}", "%Y%m%d{sep}%H%M"),
    (r"\d{8}", "%Y%m%d"),
    (r"\d{2}-\d{2}-\d{4}{sep}\d{4}", "%d-%m-%Y{sep}%H%M"),
    (r"\d{2}-\d{2}-\d{4}", "%d-%m-%Y"),
    (r"\d{2}-\d{2}-\d{2}{sep}\d{4}", "%d-%m-%y{sep}%H%M"),
    (r"\d{2}-\d{2}-\d{2}", "%d-%m-%y"),
    (r"\d{2}/\d{2}/\d{4}{sep}\d{4}", "%d/%m/%Y{sep}%H%M"),
    (r"\d{2}/\d{2}/\d{4}", "%d/%m/%Y"),
    (r"\d{2}/\d{2}/\d{2}{sep}\d{4}", "%d/%m/%y{sep}%H%M"),
    (r"\d{2}/\d{2}/\d{2}", "%d/%m/%y"),
)


def _build_patterns() -> Tuple[DatePattern, ...]:
    shapes: List[Tuple[str, str]] = []
    for regex, fmt in _FAMILIES:
        if "{sep}" not in regex:
            shapes.append((regex, fmt))
            continue
        for sep in TIME_SEPARATORS:
            shapes.append((regex.replace("{sep}", re.escape(sep)), fmt.replace("{sep}", sep)))
    return tuple(
        # A match may not start or end in the middle of a longer run of digits.
        DatePattern(order=index, regex=re.compile(rf"(?<!\d){regex}(?!\d)", re.ASCII), format=fmt)
        for index, (regex, fmt) in enumerate(shapes)
    )


DATE_PATTERNS: Tuple[DatePattern, ...] = _build_patterns()


def extract_timestamps(filename: Optional[str]) -> List[datetime]:
    """Return every timestamp found in ``filename``, in pattern priority order.

    The name may carry any prefix or suffix around the timestamp.  Nothing is
    raised for unusable input: ``None``, an empty string or a name without a
    recognisable date all give an empty list.  Most callers only want the first
    element, see :func:`first_timestamp`.
    """
    if not filename:
        return []

    found: List[datetime] = []
    for pattern in DATE_PATTERNS:
        for match in pattern.regex.finditer(filename):
            value = pattern.parse(match.group(0))
            if value is None:
                logger.debug("Skipping %r: not a valid %s", match.group(0), pattern.format)
                continue
            logger.debug("%r matched %s -> %s", filename, pattern.format, value)
            found.append(value)
            break
    return found


def first_timestamp(filename: Optional[str]) -> Optional[datetime]:
    """Return the highest priority timestamp in ``filename`` or ``None``."""
    found = extract_timestamps(filename)
    return found[0] if found else None


def timestamps_from_path(path: Optional[PathLike]) -> List[datetime]:
    """Like :func:`extract_timestamps` but only looks at the last path component.

    The path does not have to exist.
    """
    if path is None:
        return []
    return extract_timestamps(Path(path).name)


def get_timestamp(path: Optional[PathLike]) -> Optional[datetime]:
    """Return when ``path`` was last modified, without microseconds.

    ``None`` is returned for a ``None`` or empty argument and for paths that do
    not exist.
    """
    if path is None or not os.fspath(path):
        return None
    try:
        modified = Path(path).stat().st_mtime
    except OSError:
        return None
    return datetime.fromtimestamp(modified).replace(microsecond=0)


__all__ = [
    "DATE_PATTERNS",
    "DatePattern",
    "TIME_SEPARATORS",
    "extract_timestamps",
    "first_timestamp",
    "get_timestamp",
    "timestamps_from_path",
]
