"""Application search – numeric-vs-text classification."""
from __future__ import annotations

import re
from collections.abc import Iterable

from searchable.application.search.columns import ColumnConfig

__all__ = [
    "DEFAULT_NUMERIC_FIELD_PATTERNS",
    "NUMBER_TYPE",
    "is_numeric_term",
    "parse_numeric_term",
    "should_use_numeric_search",
]

NUMBER_TYPE = "number"

DEFAULT_NUMERIC_FIELD_PATTERNS: tuple[str, ...] = (
    "amount",
    "total",
    "price",
    "cost",
    "quantity",
    "number",
)

# Decimal literals with optional sign, fraction and exponent.  ``float()`` is
# too lenient on its own: it accepts "inf", "nan" and "1_000".
_NUMERIC_RE = re.compile(
    r"""
    \A\s*
    [+-]?
    (?:\d+(?:\.\d*)?|\.\d+)
    (?:[eE][+-]?\d+)?
    \s*\Z
    """,
    re.VERBOSE,
)


def is_numeric_term(term: str | None) -> bool:
    if term is None:
        return False
    return _NUMERIC_RE.match(term) is not None


def parse_numeric_term(term: str) -> float:
    """Parse a term already accepted by :func:`is_numeric_term`."""
    return float(term.strip())


def should_use_numeric_search(
    config: ColumnConfig,
    term: str,
    patterns: Iterable[str] = DEFAULT_NUMERIC_FIELD_PATTERNS,
) -> bool:
    """Decide whether *term* should be compared numerically against *config*.

    An explicit ``type`` always wins.  Otherwise a field name that looks
    numeric (``total_cost``, ``unit_price``…) is enough, and failing that the
    term itself must look like a number.
    """
    if config.type is not None:
        return config.type == NUMBER_TYPE

    field = (config.field or "").lower()
    if any(pattern.lower() in field for pattern in patterns):
        return True

    return is_numeric_term(term)
