"""Unit tests for engines.template (TemplateResolver, ChartBoard)."""

import pytest

from varflow.engines.errors import TemplateError
from varflow.engines.store import VariableStore
from varflow.engines.template import (
    ChartBoard,
    TemplateResolver,
    UnknownChartError,
    find_placeholders,
    missing_placeholders,
)
from varflow.engines.template.resolver import substitute


class TestTemplateResolverResolve:
    def test_quoted_placeholder(self) -> None:
        r = TemplateResolver()
        assert r.resolve('{"data": "${v}"}', {"v": [1, 2, 3]}) == {"data": [1, 2, 3]}

    def test_unquoted_placeholder(self) -> None:
        r = TemplateResolver()
        assert r.resolve('{"data": ${v}}', {"v": {"a": 1}}) == {"data": {"a": 1}}

    def test_string_value_quoted_form(self) -> None:
        r = TemplateResolver()
        assert r.resolve('{"title": "${t}"}', {"t": "Sales"}) == {"title": "Sales"}

    def test_placeholder_inside_string(self) -> None:
        r = TemplateResolver()
        assert r.resolve('{"title": "Total ${n}"}', {"n": 5}) == {"title": "Total 5"}

    def test_similar_names_not_confused(self) -> None:
        r = TemplateResolver()
        out = r.resolve('{"a": "${a}", "ab": "${ab}"}', {"a": 1, "ab": 2})
        assert out == {"a": 1, "ab": 2}

    def test_repeated_placeholder(self) -> None:
        r = TemplateResolver()
        assert r.resolve('["${v}", ${v}]', {"v": None}) == [None, None]

    def test_missing_placeholder_raises(self) -> None:
        r = TemplateResolver()
        with pytest.raises(TemplateError):
            r.resolve('{"data": ${missing}}', {})

    def test_quoted_missing_placeholder_raises(self) -> None:
        r = TemplateResolver()
        with pytest.raises(TemplateError, match=r"\$\{missing\}"):
            r.resolve('{"data": "${missing}"}', {})

    def test_partially_resolved_names_only_missing(self) -> None:
        r = TemplateResolver()
        with pytest.raises(TemplateError) as exc_info:
            r.resolve('{"a": "${a}", "b": "${b}"}', {"a": 1})
        assert "${b}" in str(exc_info.value)
        assert "${a}" not in str(exc_info.value)

    def test_quoted_missing_placeholder_left_untouched(self) -> None:
        assert substitute('{"data": "${missing}"}', {}) == '{"data": "${missing}"}'

    def test_invalid_json_carries_diagnostic(self) -> None:
        r = TemplateResolver()
        with pytest.raises(TemplateError, match="Expecting"):
            r.resolve('{"data": }', {})

    def test_idempotent(self) -> None:
        r = TemplateResolver()
        variables = {"v": [1.5, "x", {"k": None}]}
        t = '{"series": [{"data": "${v}"}]}'
        assert r.resolve(t, variables) == r.resolve(t, variables)

    def test_no_placeholders(self) -> None:
        assert TemplateResolver().resolve('{"a": 1}', {"v": 1}) == {"a": 1}


class TestPlaceholderHelpers:
    def test_find_placeholders(self) -> None:
        assert find_placeholders('{"a": "${x}", "b": ${y}, "c": "${x}"}') == ["x", "y"]

    def test_missing_placeholders(self) -> None:
        assert missing_placeholders('{"a": "${x}", "b": ${y}}', {"x": 1}) == ["y"]


class TestChartBoard:
    def test_put_resolves_immediately(self) -> None:
        store = VariableStore()
        store.set_many({"v": [1, 2]})
        board = ChartBoard(store)
        chart = board.put("c1", '{"data": "${v}"}')
        assert chart.last_resolved == {"data": [1, 2]}
        assert chart.last_error is None
        assert chart.resolved_revision == 1

    def test_rerenders_on_revision(self) -> None:
        store = VariableStore()
        board = ChartBoard(store)
        chart = board.put("c1", '{"data": "${v}"}')
        assert chart.last_resolved is None
        assert chart.last_error
        store.set_many({"v": [3]})
        chart = board.get("c1")
        assert chart.last_resolved == {"data": [3]}
        assert chart.last_error is None
        assert chart.resolved_revision == store.revision()

    def test_error_keeps_last_good_document(self) -> None:
        store = VariableStore()
        store.set_many({"v": 1})
        board = ChartBoard(store)
        board.put("c1", '{"data": "${v}"}')
        chart = board.put("c1", '{"data": "${v}", "extra": ${other}}')
        assert chart.last_resolved == {"data": 1}
        assert chart.last_error
        assert chart.template_text.endswith("${other}}")

    def test_pull_refresh_without_subscription(self) -> None:
        store = VariableStore()
        board = ChartBoard(store, subscribe=False)
        board.put("c1", '{"data": "${v}"}')
        store.set_many({"v": 2})
        assert board.get("c1").last_resolved is None
        refreshed = board.refresh()
        assert [c.id for c in refreshed] == ["c1"]
        assert board.get("c1").last_resolved == {"data": 2}
        assert board.refresh() == []

    def test_close_stops_following(self) -> None:
        store = VariableStore()
        board = ChartBoard(store)
        board.put("c1", '{"data": "${v}"}')
        board.close()
        store.set_many({"v": 2})
        assert board.get("c1").last_resolved is None

    def test_remove_and_unknown(self) -> None:
        board = ChartBoard(VariableStore())
        board.put("c1", "{}")
        assert [c.id for c in board.charts()] == ["c1"]
        board.remove("c1")
        with pytest.raises(UnknownChartError):
            board.get("c1")
        with pytest.raises(UnknownChartError):
            board.remove("c1")
