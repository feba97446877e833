"""Application search – declarative multi-column search compilation."""
from searchable.application.search.builder import (
    CharsetNormalizedContains,
    Operator,
    QueryBuilder,
    RawCondition,
    RoundedNumericMatch,
    Searchable,
)
from searchable.application.search.classifier import (
    DEFAULT_NUMERIC_FIELD_PATTERNS,
    is_numeric_term,
    should_use_numeric_search,
)
from searchable.application.search.columns import (
    ColumnConfig,
    ColumnConfigMapping,
    LabelOnly,
    Structured,
    normalize_config,
    titleize,
)
from searchable.application.search.compiler import SearchCompiler, SearchRequest, apply_search
from searchable.application.search.in_memory import InMemoryQueryBuilder, InMemorySearchFilter
from searchable.application.search.matcher import needs_script_aware_match
from searchable.application.search.options import get_search_column_options
from searchable.application.search.settings import SearchSettings, load_search_settings

__all__ = [
    "CharsetNormalizedContains",
    "ColumnConfig",
    "ColumnConfigMapping",
    "DEFAULT_NUMERIC_FIELD_PATTERNS",
    "InMemoryQueryBuilder",
    "InMemorySearchFilter",
    "LabelOnly",
    "Operator",
    "QueryBuilder",
    "RawCondition",
    "RoundedNumericMatch",
    "SearchCompiler",
    "SearchRequest",
    "SearchSettings",
    "Searchable",
    "Structured",
    "apply_search",
    "get_search_column_options",
    "is_numeric_term",
    "load_search_settings",
    "needs_script_aware_match",
    "normalize_config",
    "should_use_numeric_search",
    "titleize",
]
