"""Static file lookup.

Resolves a request path to a file under a fixed root directory, or
reports not-found. The request pipeline consults it only after the
router found no matching route, so registered routes always win.
"""

import mimetypes
from pathlib import Path

from warble.http.response import Response


class StaticFiles:
    """File-lookup service for a directory.

    Files are served for paths under the configured prefix. A directory
    path resolves to its index file.

    Security: resolves symlinks and verifies the final path is within the
    configured directory to prevent path traversal.

    Usage::

        static = StaticFiles(directory="./assets", prefix="/")
        response = static.lookup("GET", "/app.js")  # Response or None
    """

    __slots__ = ("_cache_control", "_directory", "_index", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

        # Normalize prefix: ensure leading slash, strip trailing.
        # Root prefix "/" normalizes to "" (every path is a candidate).
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    @property
    def directory(self) -> Path:
        return self._directory

    def lookup(self, method: str, path: str) -> Response | None:
        """Return a response for the file at *path*, or ``None`` when there is none.

        Only ``GET`` and ``HEAD`` are served. A path that escapes the
        root, or that the filesystem cannot represent, is a miss.
        """
        if method not in ("GET", "HEAD"):
            return None

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return None
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        try:
            file_path = (self._directory / relative).resolve() if relative else self._directory
            if not file_path.is_relative_to(self._directory):
                return None

            if file_path.is_dir():
                index_path = file_path / self._index
                if not index_path.is_file():
                    return None
                # Relative links in the index need the trailing slash
                if relative and not path.endswith("/"):
                    return Response(body="", status=301).with_header("Location", path + "/")
                file_path = index_path

            if not file_path.is_file():
                return None
            return self._serve_file(file_path)
        except (OSError, ValueError):
            # Embedded NUL, name too long, unreadable file
            return None

    def _serve_file(self, file_path: Path) -> Response:
        """Read a file and build a response."""
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        body = file_path.read_bytes()
        return Response(body=body, content_type=content_type).with_header(
            "Cache-Control", self._cache_control
        )
