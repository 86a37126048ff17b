"""Realtime — websocket upgrade, connections, and echo sessions."""

from warble.realtime.session import ECHO_PREFIX, EchoSession, SessionState, echo_reply
from warble.realtime.websocket import (
    Connection,
    ConnectionState,
    Message,
    MessageKind,
    handshake_problem,
    upgrade,
)

__all__ = [
    "ECHO_PREFIX",
    "Connection",
    "ConnectionState",
    "EchoSession",
    "Message",
    "MessageKind",
    "SessionState",
    "echo_reply",
    "handshake_problem",
    "upgrade",
]
