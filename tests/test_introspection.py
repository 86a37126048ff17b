"""Tests for warble.introspection — route table serialization."""

import json
import logging

import pytest

from warble.errors import SerializationError
from warble.http.response import APPLICATION_JSON
from warble.introspection import describe_routes, introspection_handler, serialize_routes
from warble.routing.router import Router


def _handler(request: object) -> str:
    return "ok"


class TestSerializeRoutes:
    def test_arrays_of_three(self) -> None:
        body = serialize_routes([("GET", "/", ""), ("GET", "/_", "routes")])
        assert json.loads(body) == [["GET", "/", ""], ["GET", "/_", "routes"]]

    def test_empty(self) -> None:
        assert serialize_routes([]) == "[]"

    def test_unserializable_raises(self) -> None:
        with pytest.raises(SerializationError):
            serialize_routes([("GET", "/", object())])  # type: ignore[list-item]


class TestDescribeRoutes:
    def test_reflects_router(self) -> None:
        router = Router()
        router.register("GET", "/", _handler)
        router.register("GET", "/_", _handler, name="routes")
        response = describe_routes(router)
        assert response.status == 200
        assert response.content_type == APPLICATION_JSON
        assert json.loads(response.text) == [["GET", "/", ""], ["GET", "/_", "routes"]]

    def test_failure_degrades_to_500(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        router = Router()
        monkeypatch.setattr(Router, "list", lambda self: [("GET", "/", {1, 2})])
        with caplog.at_level(logging.ERROR, logger="warble.server"):
            response = describe_routes(router)
        assert response.status == 500
        assert response.text == "[]"
        assert any("introspection failed" in r.getMessage() for r in caplog.records)

    def test_handler_closure(self) -> None:
        router = Router()
        router.register("POST", "/sock", _handler)
        handler = introspection_handler(router)
        assert json.loads(handler(None).text) == [["POST", "/sock", ""]]  # type: ignore[arg-type]
