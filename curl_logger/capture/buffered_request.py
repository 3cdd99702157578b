"""Request wrapper that buffers the body once and replays it on demand."""

import io
import logging
from collections import deque
from typing import AsyncGenerator, Optional

from starlette.requests import ClientDisconnect, Request
from starlette.types import Message, Receive, Scope

from .encoding import decode_body


logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class BodyCaptureError(OSError):
    """Raised when the request body cannot be drained from the transport."""


class ReplayStream:
    """
    Blocking reader over an already captured body.

    Each instance has its own cursor starting at offset 0. The body is fully
    available up front, so readiness and completion queries are unsupported.
    """

    def __init__(self, buffer: bytes):
        self._stream = io.BytesIO(buffer)
        self._size = len(buffer)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything left when negative."""
        return self._stream.read(size)

    def available(self) -> int:
        """Number of bytes that can be read without blocking."""
        if self._stream.closed:
            return 0
        return self._size - self._stream.tell()

    def is_ready(self) -> bool:
        """Unsupported; the whole body is already in memory."""
        raise io.UnsupportedOperation("is_ready is not supported on a buffered replay stream")

    def is_finished(self) -> bool:
        """Unsupported; use ``available()`` to see what is left."""
        raise io.UnsupportedOperation("is_finished is not supported on a buffered replay stream")

    def close(self) -> None:
        self._stream.close()

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def __enter__(self) -> "ReplayStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class BufferedRequest(Request):
    """
    Starlette request whose body has been drained into memory exactly once.

    Method, URL, headers and query parameters come from the same ASGI scope as
    the original request. Body access (``body``, ``stream``, ``json``,
    ``form``) is served from the captured buffer, and every replay stream or
    replay ``receive`` callable handed out starts from the first byte.
    """

    def __init__(self, scope: Scope, receive: Receive, body: bytes):
        super().__init__(scope, receive=receive)
        self._captured = body

    @classmethod
    async def capture(cls, request: Request) -> "BufferedRequest":
        """
        Drain the original request body and wrap the request.

        Reads until the transport signals the end of the body, however many
        chunks it arrives in. No size limit is applied here.

        Args:
            request: The original request; its body must not have been read

        Returns:
            BufferedRequest over the same scope

        Raises:
            BodyCaptureError: If the client disconnects or the transport fails
                while the body is being read
        """
        buffer = bytearray()
        try:
            async for chunk in request.stream():
                buffer.extend(chunk)
        except (ClientDisconnect, OSError) as e:
            logger.warning(f"Failed to read request body for {request.method} {request.url.path}: {e!r}")
            raise BodyCaptureError(f"Failed to read request body: {e!r}") from e

        return cls(request.scope, request.receive, bytes(buffer))

    @property
    def captured_body(self) -> bytes:
        return self._captured

    def has_body(self) -> bool:
        """True if the captured body is non-empty."""
        return bool(self._captured)

    def body_as_text(self, charset: str, log: Optional[logging.Logger] = None) -> Optional[str]:
        """
        Decode the captured body, decompressing gzip-framed bytes first.

        Returns None when there is no body.
        """
        if not self.has_body():
            return None
        return decode_body(self._captured, charset, log)

    def open_replay_stream(self) -> ReplayStream:
        """Return a new reader positioned at the start of the captured body."""
        return ReplayStream(self._captured)

    def replay_receive(self) -> Receive:
        """
        Build a fresh ASGI ``receive`` callable that replays the body.

        The body goes out as ``http.request`` messages of at most
        ``CHUNK_SIZE`` bytes. Once it has been delivered, calls fall through to
        the original ``receive`` so disconnects are still reported.
        """
        body = self._captured
        pending = deque(body[i:i + CHUNK_SIZE] for i in range(0, len(body), CHUNK_SIZE))
        if not pending:
            pending.append(b"")
        original_receive = self.receive

        async def receive() -> Message:
            if pending:
                chunk = pending.popleft()
                return {"type": "http.request", "body": chunk, "more_body": bool(pending)}
            return await original_receive()

        return receive

    async def body(self) -> bytes:
        return self._captured

    async def stream(self) -> AsyncGenerator[bytes, None]:
        with self.open_replay_stream() as replay:
            while True:
                chunk = replay.read(CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        yield b""
