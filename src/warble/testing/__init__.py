"""Test utilities for warble applications.

    from warble.testing import TestClient
"""

from warble.testing.client import TestClient
from warble.testing.websocket import WebSocketClosed, WebSocketTestSession

__all__ = ["TestClient", "WebSocketClosed", "WebSocketTestSession"]
