"""Transports — deliver raw payloads to a :class:`Dispatcher` and send replies back.

Each transport satisfies the :class:`Transport` protocol, providing
``receive`` and ``respond`` methods.  :func:`serve_transport` drives any of
them against one dispatcher.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

if TYPE_CHECKING:
    from weather_mcp.protocols.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Abstract transport for JSON-RPC payloads."""

    async def receive(self) -> str | None: ...
    async def respond(self, payload: str) -> None: ...


class StdioTransport:
    """Serves newline-delimited JSON over this process's stdin/stdout.

    ``reader`` and ``writer`` default to the process streams; tests pass
    their own.  Nothing but protocol payloads is ever written to ``writer``.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None = None,
        writer: BinaryIO | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer

    async def connect(self) -> None:
        """Attach an async reader to stdin (no-op when a reader was injected)."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=2**20)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)
        if self._writer is None:
            self._writer = sys.stdout.buffer

    async def receive(self) -> str | None:
        """Return the next non-blank line, or ``None`` at end of stream.

        Lines longer than the reader limit are logged and skipped.
        """
        if self._reader is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        while True:
            try:
                line = await self._reader.readline()
            except ValueError as exc:
                # Line exceeded the reader limit; the reader has dropped it.
                logger.warning("Skipping oversized input line: %s", exc)
                continue
            if not line:
                return None
            text = line.decode("utf-8", errors="replace").strip()
            if text:
                return text

    async def respond(self, payload: str) -> None:
        """Write one payload line and flush."""
        if self._writer is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        self._writer.write(payload.encode("utf-8") + b"\n")
        self._writer.flush()


async def serve_transport(dispatcher: Dispatcher, transport: Transport) -> int:
    """Pump payloads from *transport* through *dispatcher* until end of stream.

    Returns the number of payloads handled.
    """
    handled = 0
    while True:
        raw = await transport.receive()
        if raw is None:
            logger.info("End of input after %d message(s)", handled)
            return handled
        handled += 1
        reply = await dispatcher.handle(raw)
        if reply is not None:
            await transport.respond(reply)
