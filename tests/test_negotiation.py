"""Tests for warble.server.negotiation — return value dispatch."""

import json

import pytest

from warble.http.response import APPLICATION_JSON, TEXT_PLAIN, Response
from warble.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        original = Response(body="hello", status=201)
        assert negotiate(original) is original

    def test_none_is_204(self) -> None:
        assert negotiate(None).status == 204

    def test_str(self) -> None:
        result = negotiate("hello world.")
        assert result.status == 200
        assert result.content_type == TEXT_PLAIN
        assert result.text == "hello world."

    def test_bytes(self) -> None:
        result = negotiate(b"\x00\x01")
        assert result.content_type == "application/octet-stream"

    def test_list_is_json(self) -> None:
        result = negotiate([["GET", "/", ""]])
        assert result.content_type == APPLICATION_JSON
        assert json.loads(result.text) == [["GET", "/", ""]]

    def test_dict_is_json(self) -> None:
        assert json.loads(negotiate({"a": 1}).text) == {"a": 1}

    def test_status_tuple(self) -> None:
        result = negotiate(("Dude, not found.", 404))
        assert result.status == 404
        assert result.text == "Dude, not found."

    def test_status_headers_tuple(self) -> None:
        result = negotiate(("created", 201, {"Location": "/x"}))
        assert result.status == 201
        assert ("Location", "/x") in result.headers

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="object"):
            negotiate(object())
