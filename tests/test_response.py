"""Tests for warble.http.response — immutable Response."""

from warble.http.response import APPLICATION_JSON, TEXT_PLAIN, Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type == TEXT_PLAIN
        assert response.headers == ()

    def test_with_status_returns_new(self) -> None:
        original = Response("x")
        changed = original.with_status(404)
        assert changed.status == 404
        assert original.status == 200

    def test_with_header_appends(self) -> None:
        response = Response().with_header("X-A", "1").with_header("X-B", "2")
        assert response.headers == (("X-A", "1"), ("X-B", "2"))

    def test_with_headers(self) -> None:
        response = Response().with_headers({"X-A": "1"})
        assert ("X-A", "1") in response.headers

    def test_with_content_type(self) -> None:
        assert Response().with_content_type(APPLICATION_JSON).content_type == APPLICATION_JSON

    def test_body_bytes_and_text(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"abc").text == "abc"
