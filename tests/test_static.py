"""Tests for static file lookup and its place in the request pipeline."""

import pytest

from warble.app import App
from warble.config import AppConfig
from warble.http.request import Request
from warble.middleware.static import StaticFiles
from warble.testing import TestClient


@pytest.fixture
def static_dir(tmp_path):
    """Create temporary static files for testing."""
    static = tmp_path / "assets"
    static.mkdir()
    (static / "style.css").write_text("body { color: red; }")
    (static / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (static / "data.unknownext").write_bytes(b"\x00\x01")
    (static / "index.html").write_text("<h1>Home</h1>")

    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    (static / "empty").mkdir()
    (tmp_path / "secret.txt").write_text("top secret")
    return static


class TestLookup:
    def test_serves_file(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/style.css")
        assert response is not None
        assert response.status == 200
        assert "text/css" in response.content_type
        assert response.text == "body { color: red; }"
        assert ("Cache-Control", "public, max-age=3600") in response.headers

    def test_binary_content_type(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/image.png")
        assert response is not None
        assert response.content_type == "image/png"

    def test_unknown_extension_is_octet_stream(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/data.unknownext")
        assert response is not None
        assert response.content_type == "application/octet-stream"

    def test_miss_returns_none(self, static_dir) -> None:
        assert StaticFiles(static_dir).lookup("GET", "/nope.txt") is None

    def test_only_get_and_head(self, static_dir) -> None:
        static = StaticFiles(static_dir)
        assert static.lookup("HEAD", "/style.css") is not None
        assert static.lookup("POST", "/style.css") is None

    def test_root_serves_index(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/")
        assert response is not None
        assert response.text == "<h1>Home</h1>"

    def test_directory_index_with_slash(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/docs/")
        assert response is not None
        assert response.text == "<h1>Docs</h1>"

    def test_directory_without_slash_redirects(self, static_dir) -> None:
        response = StaticFiles(static_dir).lookup("GET", "/docs")
        assert response is not None
        assert response.status == 301
        assert ("Location", "/docs/") in response.headers

    def test_directory_without_index_is_miss(self, static_dir) -> None:
        assert StaticFiles(static_dir).lookup("GET", "/empty/") is None

    def test_traversal_is_miss(self, static_dir) -> None:
        static = StaticFiles(static_dir)
        assert static.lookup("GET", "/../secret.txt") is None
        assert static.lookup("GET", "/docs/../../secret.txt") is None

    @pytest.mark.parametrize("path", ["/a\x00b", "/docs/\x00", "/" + "x" * 4096])
    def test_unrepresentable_path_is_miss(self, static_dir, path: str) -> None:
        assert StaticFiles(static_dir).lookup("GET", path) is None

    def test_prefix(self, static_dir) -> None:
        static = StaticFiles(static_dir, prefix="/static/")
        assert static.lookup("GET", "/style.css") is None
        response = static.lookup("GET", "/static/style.css")
        assert response is not None
        assert response.status == 200

    def test_prefix_requires_boundary(self, static_dir) -> None:
        static = StaticFiles(static_dir, prefix="/static")
        assert static.lookup("GET", "/staticstyle.css") is None

    def test_missing_root_is_miss(self, tmp_path) -> None:
        assert StaticFiles(tmp_path / "absent").lookup("GET", "/x.css") is None


class TestPipeline:
    def _app(self, static_dir) -> App:
        return App(AppConfig(static_dir=static_dir, access_log=False))

    async def test_unrouted_path_served_from_root(self, static_dir) -> None:
        app = self._app(static_dir)
        async with TestClient(app) as client:
            response = await client.get("/style.css")
        assert response.status == 200
        assert "color: red" in response.text

    async def test_route_wins_over_file(self, static_dir) -> None:
        app = self._app(static_dir)

        @app.route("/style.css")
        def generated(request: Request) -> str:
            return "generated"

        async with TestClient(app) as client:
            response = await client.get("/style.css")
        assert response.text == "generated"

    async def test_miss_falls_back_to_not_found(self, static_dir) -> None:
        app = self._app(static_dir)

        @app.not_found
        def missing(request: Request) -> tuple[str, int]:
            return "nothing here", 404

        async with TestClient(app) as client:
            response = await client.get("/nope.txt")
        assert response.status == 404
        assert response.text == "nothing here"

    async def test_head_has_length_but_no_body(self, static_dir) -> None:
        app = self._app(static_dir)
        async with TestClient(app) as client:
            response = await client.head("/style.css")
        assert response.status == 200
        assert response.body == b""
        assert ("content-length", "20") in response.headers

    async def test_disabled_static(self, static_dir) -> None:
        app = App(AppConfig(static_dir=None, access_log=False))
        async with TestClient(app) as client:
            response = await client.get("/style.css")
        assert response.status == 404
