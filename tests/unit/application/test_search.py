"""Unit tests for search compilation – columns, classification, compiler, options."""
from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from searchable.application.search import (
    CharsetNormalizedContains,
    ColumnConfig,
    LabelOnly,
    RoundedNumericMatch,
    SearchCompiler,
    SearchRequest,
    SearchSettings,
    Structured,
    apply_search,
    get_search_column_options,
    is_numeric_term,
    needs_script_aware_match,
    normalize_config,
    should_use_numeric_search,
    titleize,
)
from searchable.application.search.columns import tag_raw_config
from searchable.kernel.errors import UnknownColumnError
from searchable.testing.fakes import RecordedCall, RecordingQueryBuilder

AHMED_AR = "\u0623\u062D\u0645\u062F"


def _compile(columns, term, column=None, settings=None) -> list[RecordedCall]:
    builder = RecordingQueryBuilder()
    SearchCompiler(settings).apply(builder, columns, term, column)
    return builder.calls


def _like(field: str, term: str) -> RecordedCall:
    return RecordedCall("or_where", (field, "LIKE", f"%{term}%"))


def _numeric(field: str, value: float) -> RecordedCall:
    return RecordedCall(
        "or_group",
        (),
        (
            RecordedCall("or_where", (field, "=", value)),
            RecordedCall("or_where_raw", (RoundedNumericMatch(field, value, 0.0001),)),
        ),
    )


# ---------------------------------------------------------------------------
# Column configuration
# ---------------------------------------------------------------------------


class TestNormalizeConfig:
    def test_label_only_uses_key_as_field(self) -> None:
        config = normalize_config("reference", "Reference")
        assert config == ColumnConfig(key="reference", field="reference", label="Reference")
        assert config.is_relation is False

    def test_structured_defaults_field_to_key(self) -> None:
        config = normalize_config("total", {"label": "Total", "type": "number"})
        assert config.field == "total"
        assert config.label == "Total"
        assert config.type == "number"

    def test_explicit_field_overrides_key(self) -> None:
        config = normalize_config("customer", {"relation": "customer", "field": "full_name"})
        assert config.field == "full_name"
        assert config.relation == "customer"
        assert config.is_relation is True

    def test_relation_without_field_searches_key_on_related(self) -> None:
        config = normalize_config("name", {"relation": "owner"})
        assert config.field == "name"
        assert config.is_relation is True

    def test_explicit_none_field_leaves_entry_without_field(self) -> None:
        config = normalize_config("ghost", {"relation": "owner", "field": None})
        assert config.has_field is False
        assert config.is_relation is False

    def test_missing_label_resolves_lazily(self) -> None:
        config = normalize_config("unit_price", {})
        assert config.label is None
        assert config.display_label == "Unit price"

    def test_unknown_keys_are_ignored(self) -> None:
        config = normalize_config("name", {"visible": False})
        assert config == ColumnConfig(key="name", field="name")

    def test_tags_raw_shapes(self) -> None:
        assert tag_raw_config("Label") == LabelOnly("Label")
        assert tag_raw_config({"field": "x"}) == Structured({"field": "x"})


class TestTitleize:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("b", "B"),
            ("order_total", "Order total"),
            ("createdAt", "CreatedAt"),
            ("", ""),
        ],
    )
    def test_titleize(self, key: str, expected: str) -> None:
        assert titleize(key) == expected


# ---------------------------------------------------------------------------
# Numeric classification
# ---------------------------------------------------------------------------


class TestIsNumericTerm:
    @pytest.mark.parametrize("term", ["12", "-3.5", "+7", ".5", "1.", "1e3", "2.5E-4", " 42 "])
    def test_numeric_literals(self, term: str) -> None:
        assert is_numeric_term(term) is True

    @pytest.mark.parametrize("term", ["", "abc", "0x1A", "inf", "nan", "1_000", "1e", "+", "12abc", None])
    def test_non_numeric(self, term: str | None) -> None:
        assert is_numeric_term(term) is False

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_any_finite_float_repr_is_numeric(self, value: float) -> None:
        assert is_numeric_term(repr(value))


class TestShouldUseNumericSearch:
    def test_explicit_number_type_wins(self) -> None:
        config = normalize_config("code", {"type": "number"})
        assert should_use_numeric_search(config, "abc") is True

    def test_explicit_other_type_forces_text(self) -> None:
        config = normalize_config("total_amount", {"type": "text"})
        assert should_use_numeric_search(config, "100") is False

    @pytest.mark.parametrize("field", ["total_cost", "Unit_PRICE", "quantity", "phone_number", "amount"])
    def test_field_name_patterns(self, field: str) -> None:
        assert should_use_numeric_search(normalize_config(field, "x"), "abc") is True

    def test_falls_back_to_term(self) -> None:
        config = normalize_config("reference", "Reference")
        assert should_use_numeric_search(config, "42") is True
        assert should_use_numeric_search(config, "INV-42") is False

    def test_custom_patterns(self) -> None:
        config = normalize_config("fee", "Fee")
        assert should_use_numeric_search(config, "abc", patterns=["fee"]) is True


class TestNeedsScriptAwareMatch:
    def test_arabic_term(self) -> None:
        assert needs_script_aware_match(AHMED_AR) is True

    def test_mixed_term(self) -> None:
        assert needs_script_aware_match(f"order {AHMED_AR} 12") is True

    def test_block_boundaries(self) -> None:
        assert needs_script_aware_match("\u0600") is True
        assert needs_script_aware_match("\u06FF") is True
        assert needs_script_aware_match("\u0700") is False

    def test_latin_term(self) -> None:
        assert needs_script_aware_match("Ahmed") is False


# ---------------------------------------------------------------------------
# SearchCompiler
# ---------------------------------------------------------------------------


COLUMNS = {
    "reference": "Reference",
    "total_cost": {"label": "Total"},
    "user": {"relation": "user", "field": "full_name"},
}


class TestSearchCompilerNoOp:
    @pytest.mark.parametrize("term", ["", None, "0"])
    def test_empty_term_adds_nothing(self, term: str | None) -> None:
        assert _compile(COLUMNS, term) == []

    def test_unknown_column_adds_nothing(self) -> None:
        assert _compile(COLUMNS, "acme", "nope") == []

    def test_empty_configuration_adds_nothing(self) -> None:
        assert _compile({}, "acme") == []

    def test_returns_same_builder(self) -> None:
        builder = RecordingQueryBuilder()
        assert SearchCompiler().apply(builder, COLUMNS, "") is builder

    def test_request_emptiness(self) -> None:
        assert SearchRequest(None).is_empty
        assert SearchRequest("").is_empty
        assert SearchRequest("0").is_empty
        assert not SearchRequest("00").is_empty
        assert not SearchRequest(" 0").is_empty

    def test_empty_column_key_adds_nothing(self) -> None:
        assert _compile(COLUMNS, "acme", "") == []

    def test_none_column_means_all_columns(self) -> None:
        assert _compile(COLUMNS, "acme", None) == _compile(COLUMNS, "acme", "all")


class TestSearchCompilerAllColumns:
    def test_one_sub_predicate_per_entry(self) -> None:
        calls = _compile(COLUMNS, "Ahmed")
        assert len(calls) == 1
        assert calls[0].op == "and_group"
        assert len(calls[0].children) == len(COLUMNS)

    def test_text_term_shape(self) -> None:
        calls = _compile(COLUMNS, "Ahmed")
        assert calls == [
            RecordedCall(
                "and_group",
                (),
                (
                    _like("reference", "Ahmed"),
                    _like("total_cost", "Ahmed"),
                    RecordedCall("or_where_has", ("user",), (_like("full_name", "Ahmed"),)),
                ),
            )
        ]

    def test_numeric_term_shape(self) -> None:
        (group,) = _compile(COLUMNS, "100")
        assert group.children == (
            _numeric("reference", 100.0),
            _numeric("total_cost", 100.0),
            RecordedCall("or_where_has", ("user",), (_numeric("full_name", 100.0),)),
        )

    def test_entries_without_field_are_skipped(self) -> None:
        columns = {**COLUMNS, "ghost": {"relation": "owner", "field": None}}
        (group,) = _compile(columns, "acme")
        assert len(group.children) == len(COLUMNS)

    def test_blank_relation_is_direct_search(self) -> None:
        columns = {"name": {"relation": "", "field": "name"}, "empty": {"field": ""}}
        assert _compile(columns, "acme") == [RecordedCall("and_group", (), (_like("name", "acme"),))]

    def test_custom_all_columns_token(self) -> None:
        settings = SearchSettings(all_columns_token="*")
        (group,) = _compile(COLUMNS, "acme", "*", settings=settings)
        assert len(group.children) == 3
        assert _compile(COLUMNS, "acme", "all", settings=settings) == []


class TestSearchCompilerSingleColumn:
    def test_only_target_column_is_compiled(self) -> None:
        assert _compile(COLUMNS, "acme", "reference") == [
            RecordedCall("and_group", (), (_like("reference", "acme"),))
        ]

    def test_total_cost_with_integer_term(self) -> None:
        (group,) = _compile(COLUMNS, "100", "total_cost")
        assert group.children == (_numeric("total_cost", 100.0),)

    def test_number_type_with_text_term_is_containment(self) -> None:
        columns = {"quantity": {"type": "number"}}
        (group,) = _compile(columns, "many", "quantity")
        assert group.children == (_like("quantity", "many"),)

    def test_numeric_term_parsed_as_float(self) -> None:
        (group,) = _compile(COLUMNS, " 12.50 ", "total_cost")
        assert group.children == (_numeric("total_cost", 12.5),)

    def test_custom_tolerance(self) -> None:
        settings = SearchSettings(numeric_tolerance=0.5)
        (group,) = _compile(COLUMNS, "7", "total_cost", settings=settings)
        raw = group.children[0].children[1].args[0]
        assert raw == RoundedNumericMatch("total_cost", 7.0, 0.5)


class TestSearchCompilerRelation:
    def test_latin_term_uses_containment(self) -> None:
        (group,) = _compile(COLUMNS, "Ahmed", "user")
        assert group.children == (
            RecordedCall("or_where_has", ("user",), (_like("full_name", "Ahmed"),)),
        )

    def test_arabic_term_uses_charset_normalized_match(self) -> None:
        (group,) = _compile(COLUMNS, AHMED_AR, "user")
        assert group.children == (
            RecordedCall(
                "or_where_has",
                ("user",),
                (
                    RecordedCall(
                        "or_where_raw",
                        (CharsetNormalizedContains("full_name", f"%{AHMED_AR}%", "utf8mb4"),),
                    ),
                ),
            ),
        )

    def test_arabic_term_on_direct_column_stays_plain(self) -> None:
        (group,) = _compile(COLUMNS, AHMED_AR, "reference")
        assert group.children == (_like("reference", AHMED_AR),)

    def test_charset_comes_from_settings(self) -> None:
        settings = SearchSettings(script_aware_charset="utf8")
        (group,) = _compile(COLUMNS, AHMED_AR, "user", settings=settings)
        raw = group.children[0].children[0].args[0]
        assert raw.charset == "utf8"


class _FailingBuilder(RecordingQueryBuilder):
    """Rejects one field the way a model-backed adapter does."""

    def or_where(self, field, operator, value):
        if field == "ghost":
            raise UnknownColumnError("Order", field)
        super().or_where(field, operator, value)

    def _record_group(self, op, args, build):
        child = _FailingBuilder()
        build(child)
        self._calls.append(RecordedCall(op, args, tuple(child.calls)))


class TestSearchCompilerFailSoft:
    def test_unresolvable_entry_is_skipped_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        builder = _FailingBuilder()
        columns = {"reference": "Reference", "ghost": "Ghost", "notes": "Notes"}
        with caplog.at_level(logging.WARNING, logger="searchable.application.search.compiler"):
            SearchCompiler().apply(builder, columns, "acme")
        (group,) = builder.calls
        assert group.children == (_like("reference", "acme"), _like("notes", "acme"))
        assert "search.column_skipped column=ghost" in caplog.text

    def test_failure_inside_numeric_group_leaves_no_partial_group(self) -> None:
        builder = _FailingBuilder()
        SearchCompiler().apply(builder, {"ghost": {"type": "number"}, "total": "Total"}, "5")
        (group,) = builder.calls
        assert group.children == (_numeric("total", 5.0),)


class TestSearchCompilerProperties:
    @given(term=st.text(max_size=20), column=st.sampled_from(["all", "reference", "user", "nope"]))
    def test_compilation_is_idempotent(self, term: str, column: str) -> None:
        assert _compile(COLUMNS, term, column) == _compile(COLUMNS, term, column)

    @given(term=st.text(min_size=1, max_size=20).filter(lambda t: t != "0"))
    def test_all_yields_one_clause_per_entry(self, term: str) -> None:
        (group,) = _compile(COLUMNS, term)
        assert len(group.children) == len(COLUMNS)

    def test_apply_search_shortcut(self) -> None:
        builder = RecordingQueryBuilder()
        apply_search(builder, COLUMNS, "acme", "reference")
        assert builder.calls == _compile(COLUMNS, "acme", "reference")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class TestSearchColumnOptions:
    def test_label_and_titleized_fallback(self) -> None:
        options = get_search_column_options({"a": "Label A", "b": {"relation": "r", "field": "f"}})
        assert options == {"a": "Label A", "b": "B"}

    def test_structured_label_wins(self) -> None:
        assert get_search_column_options({"total_cost": {"label": "Total"}}) == {"total_cost": "Total"}

    def test_declaration_order_is_kept(self) -> None:
        columns = {"z": "Z", "a": "A", "m_n": {}}
        assert list(get_search_column_options(columns).items()) == [("z", "Z"), ("a", "A"), ("m_n", "M n")]

    def test_empty_configuration(self) -> None:
        assert get_search_column_options({}) == {}
