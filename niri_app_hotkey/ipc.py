"""Interact with niri using its JSON socket."""

__all__ = [
    "NiriSocket",
    "niri_connection",
]

import asyncio
import json
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging import Logger
from typing import Any

from .constants import IPC_LINE_LIMIT, NIRI_SOCKET_ENV
from .models import CompositorError

Request = str | dict[str, Any]


def _request_name(payload: Request) -> str:
    """Short name of a request, for messages."""
    if isinstance(payload, str):
        return payload
    name = next(iter(payload), "?")
    inner = payload.get(name)
    if name == "Action" and isinstance(inner, dict):
        return f"Action {next(iter(inner), '?')}"
    return name


class NiriSocket:
    """One request/response connection to niri.

    niri reads one JSON request per line and answers with one JSON line,
    either `{"Ok": ...}` or `{"Err": "message"}`.
    """

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, log: Logger) -> None:
        self.reader = reader
        self.writer = writer
        self.log = log

    async def request(self, payload: Request) -> Any:  # noqa: ANN401
        """Send `payload` and return the content of the `Ok` reply.

        Raises:
            CompositorError: on I/O errors, malformed replies or `Err` replies
        """
        name = _request_name(payload)
        self.log.debug("niri request: %s", payload)
        try:
            self.writer.write(json.dumps(payload).encode() + b"\n")
            await self.writer.drain()
            raw = await self.reader.readline()
        except OSError as e:
            msg = f"{name}: connection to niri failed: {e}"
            raise CompositorError(msg) from e
        except (ValueError, asyncio.LimitOverrunError, asyncio.IncompleteReadError) as e:
            msg = f"{name}: reply from niri could not be read: {e}"
            raise CompositorError(msg) from e

        if not raw:
            msg = f"{name}: niri closed the connection"
            raise CompositorError(msg)
        try:
            reply = json.loads(raw.decode("utf-8", errors="replace"))
        except json.JSONDecodeError as e:
            msg = f"{name}: malformed reply from niri: {e}"
            raise CompositorError(msg) from e

        if isinstance(reply, dict):
            if "Ok" in reply:
                return reply["Ok"]
            if "Err" in reply:
                msg = f"{name}: niri replied with an error: {reply['Err']}"
                raise CompositorError(msg)
        msg = f"{name}: unexpected reply from niri: {reply!r}"
        raise CompositorError(msg)


@asynccontextmanager
async def niri_connection(log: Logger, path: str | None = None) -> AsyncIterator[NiriSocket]:
    """Open the niri socket for the duration of the block.

    Args:
        log: Logger to use
        path: socket path, defaults to $NIRI_SOCKET

    Raises:
        CompositorError: if the socket can't be opened
    """
    path = path or os.environ.get(NIRI_SOCKET_ENV)
    if not path:
        msg = f"${NIRI_SOCKET_ENV} is not set, is niri running ?"
        raise CompositorError(msg)
    try:
        reader, writer = await asyncio.open_unix_connection(path, limit=IPC_LINE_LIMIT)
    except OSError as e:
        log.debug("niri socket not usable at %s", path)
        msg = f"Failed to connect to niri at {path}: {e}"
        raise CompositorError(msg) from e

    try:
        yield NiriSocket(reader, writer, log)
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            log.debug("Error while closing the niri socket: %s", e)
