"""Unit tests for engines.session (EngineSession)."""

import asyncio
import json

import httpx
import pytest

from varflow.engines.errors import TemplateError, TranspileError
from varflow.engines.remote import RemoteCalculationBridge
from varflow.engines.script import ScriptSandbox
from varflow.engines.session import EngineSession
from varflow.engines.tables import InMemoryTableProvider, UnknownTableError


def _session(**kwargs) -> EngineSession:
    kwargs.setdefault("data_source_names", ["ds1", "ds2"])
    kwargs.setdefault("sandbox", ScriptSandbox(timeout=0))
    return EngineSession("s", **kwargs)


class TestEngineSessionScripts:
    def test_run_script_publishes_bindings(self) -> None:
        session = _session()
        session.data_sources.set_text("ds1", "[1, 2, 3]")
        result = session.run_script("a = [x * 2 for x in ds1]")
        assert result.ok
        assert session.variables.get_all() == {"a": [2, 4, 6]}
        assert session.variables.revision() == 1

    def test_failed_run_publishes_nothing(self) -> None:
        session = _session()
        session.run_script("a = 1")
        result = session.run_script("a = 2\nb = 1 / 0\n")
        assert not result.ok
        assert session.variables.get_all() == {"a": 1}
        assert session.variables.revision() == 1

    def test_deeply_nested_source_does_not_break_runs(self) -> None:
        session = _session()
        deep = "[" * 100000 + "]" * 100000
        session.data_sources.set_text("ds1", deep)
        result = session.run_script("a = 1\nn = len(ds1)")
        assert result.ok
        assert session.variables.get_all() == {"a": 1, "n": len(deep)}

    def test_transpile_error_propagates(self) -> None:
        session = _session()
        with pytest.raises(TranspileError):
            session.run_script("a = (")
        assert session.variables.revision() == 0

    def test_chart_follows_script(self) -> None:
        session = _session()
        session.charts.put("c1", '{"series": [{"data": "${a}"}]}')
        session.data_sources.set_text("ds1", "[1, 2]")
        session.run_script("a = ds1")
        assert session.charts.get("c1").last_resolved == {"series": [{"data": [1, 2]}]}

    def test_resolve(self) -> None:
        session = _session()
        session.run_script("v = 3")
        assert session.resolve('{"n": ${v}}') == {"n": 3}
        with pytest.raises(TemplateError):
            session.resolve('{"n": ${w}}')


class TestEngineSessionTables:
    def test_import_table_creates_query_source(self) -> None:
        session = _session()
        ds = session.import_table("people")
        assert ds.name == "query_1"
        assert json.loads(ds.raw_text)[0]["name"] == "John"
        assert "\n  " in ds.raw_text
        assert session.import_table("people").name == "query_2"

    def test_import_table_named_source(self) -> None:
        session = _session(table_provider=InMemoryTableProvider({"t": [{"a": 1}]}))
        session.import_table("t", "ds2")
        session.run_script("rows = ds2")
        assert session.variables.get("rows") == [{"a": 1}]

    def test_import_skips_taken_query_name(self) -> None:
        session = _session(data_source_names=["query_1"])
        assert session.import_table("people").name == "query_2"

    def test_unknown_table(self) -> None:
        with pytest.raises(UnknownTableError):
            _session().import_table("nope")


class TestEngineSessionIsolation:
    def test_sessions_do_not_share_state(self) -> None:
        one, two = _session(), _session()
        one.data_sources.create("only_here")
        one.run_script("x = 1")
        assert "only_here" not in two.data_sources
        assert two.variables.get_all() == {}


class TestEngineSessionCalculate:
    def test_calculate_through_bridge(self) -> None:
        session = _session()
        session.run_script("data = [1, 2, 3]")
        transport = httpx.MockTransport(lambda req: httpx.Response(200, json={"success": True, "value": 6}))
        session.bridge = RemoteCalculationBridge(session.variables, url="http://calc.test/", transport=transport)
        assert asyncio.run(session.calculate("sum(data)", "total")) == 6
        assert session.variables.get_all() == {"data": [1, 2, 3], "total": 6}
