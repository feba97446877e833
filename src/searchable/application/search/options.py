"""Application search – column options for search UIs."""
from __future__ import annotations

from searchable.application.search.columns import ColumnConfigMapping, normalize_config

__all__ = ["get_search_column_options"]


def get_search_column_options(columns: ColumnConfigMapping) -> dict[str, str]:
    """Return ``{column_key: label}`` in declaration order.

    Example::

        >>> get_search_column_options({"ref": "Reference", "unit_price": {"type": "number"}})
        {'ref': 'Reference', 'unit_price': 'Unit price'}
    """
    return {key: normalize_config(key, raw).display_label for key, raw in columns.items()}
