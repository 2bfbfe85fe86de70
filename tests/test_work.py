"""Tests for scopelog.work - describing the unit of work."""

import pytest
from starlette.requests import Request

from scopelog import WorkUnit


def http_scope(**overrides):
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/hello",
        "raw_path": b"/hello",
        "query_string": b"",
        "headers": [],
        "server": ("testserver", 80),
        "scheme": "http",
        "root_path": "",
    }
    scope.update(overrides)
    return scope


class TestFromScope:
    def test_method_and_path(self):
        assert WorkUnit.from_scope(http_scope()) == WorkUnit("GET", "/hello")

    def test_query_string_kept(self):
        unit = WorkUnit.from_scope(http_scope(query_string=b"name=bob"))
        assert str(unit) == "GET /hello?name=bob"

    def test_raw_path_is_not_decoded(self):
        unit = WorkUnit.from_scope(http_scope(path="/a b", raw_path=b"/a%20b"))
        assert unit.target == "/a%20b"

    def test_falls_back_to_path(self):
        scope = http_scope(method="DELETE", path="/items/1")
        del scope["raw_path"]
        assert str(WorkUnit.from_scope(scope)) == "DELETE /items/1"


class TestDescribe:
    def test_work_unit_passes_through(self):
        unit = WorkUnit("PUT", "/x")
        assert WorkUnit.describe(unit) is unit

    def test_scope(self):
        assert str(WorkUnit.describe(http_scope())) == "GET /hello"

    def test_starlette_request(self):
        request = Request(http_scope(method="POST", query_string=b"page=2"))
        assert str(WorkUnit.describe(request)) == "POST /hello?page=2"

    def test_target_attribute(self):
        class Job:
            method = "RUN"
            target = "nightly-report"

        assert str(WorkUnit.describe(Job())) == "RUN nightly-report"

    def test_nothing_to_describe(self):
        class Nameless:
            method = "GET"

        with pytest.raises(TypeError, match="Nameless"):
            WorkUnit.describe(Nameless())
