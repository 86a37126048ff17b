"""Echo session — the receive/transform/send loop for one connection.

The session starts ``OPEN`` and ends ``CLOSED``; the only way to
``CLOSED`` is a failed receive or send (peer close included). Each
reply has the same kind as the message it answers, and exactly one
message is in flight per direction.
"""

import logging
from enum import Enum

import anyio

from warble.errors import SessionIOError
from warble.realtime.websocket import (
    CLOSE_GOING_AWAY,
    CLOSE_NORMAL,
    Connection,
    Message,
    MessageKind,
)

logger = logging.getLogger("warble.session")

ECHO_PREFIX = "you wrote: "


class SessionState(Enum):
    OPEN = "open"
    CLOSED = "closed"


def echo_reply(message: Message, prefix: str = ECHO_PREFIX) -> Message:
    """Build the reply for *message*: same kind, *prefix* + payload."""
    if message.kind is MessageKind.TEXT:
        return Message.text_message(prefix + message.text)
    return Message.binary_message(prefix.encode("utf-8") + message.data)


def _format_remote(remote: tuple[str, int] | None) -> str:
    if remote is None:
        return "unknown"
    return f"{remote[0]}:{remote[1]}"


class EchoSession:
    """Owns one connection and echoes every message back until it ends.

    Usage::

        connection = await upgrade(request)
        await EchoSession(connection, idle_timeout=60.0).run()

    ``idle_timeout`` bounds each blocking receive; when it expires the
    connection is closed with 1001 (going away). ``None`` waits forever.
    """

    __slots__ = ("_connection", "_idle_timeout", "_prefix", "_state", "echoed", "error")

    def __init__(
        self,
        connection: Connection,
        *,
        prefix: str = ECHO_PREFIX,
        idle_timeout: float | None = None,
    ) -> None:
        self._connection = connection
        self._prefix = prefix
        self._idle_timeout = idle_timeout
        self._state = SessionState.OPEN if connection.is_open else SessionState.CLOSED
        self.echoed = 0
        self.error: SessionIOError | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def connection(self) -> Connection:
        return self._connection

    async def run(self) -> None:
        """Run the loop until the connection fails. Never raises ``SessionIOError``."""
        remote = _format_remote(self._connection.remote)
        logger.info("Client %s", remote)
        close_code = CLOSE_NORMAL
        try:
            while self._state is SessionState.OPEN:
                try:
                    inbound = await self._next_message()
                    await self._connection.send(echo_reply(inbound, self._prefix))
                except SessionIOError as exc:
                    self.error = exc
                    if exc.code == CLOSE_GOING_AWAY:
                        close_code = CLOSE_GOING_AWAY
                    logger.info("bye %s", remote)
                    logger.info("%s", exc)
                    break
                self.echoed += 1
        finally:
            self._state = SessionState.CLOSED
            await self._connection.close(close_code)

    async def _next_message(self) -> Message:
        if self._idle_timeout is None:
            return await self._connection.receive()
        try:
            with anyio.fail_after(self._idle_timeout):
                return await self._connection.receive()
        except TimeoutError as exc:
            msg = f"no message for {self._idle_timeout}s"
            raise SessionIOError(msg, code=CLOSE_GOING_AWAY) from exc
