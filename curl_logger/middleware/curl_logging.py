"""Middleware that logs every request as a replayable curl command."""

import logging
from typing import Optional

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from ..capture import BufferedRequest, CommandReconstructor
from ..config import get_settings


class CurlLoggingMiddleware:
    """
    ASGI middleware that buffers the request body and logs a curl command.

    For each HTTP request:
    1. Drains the body into a BufferedRequest
    2. Builds the curl command and logs it at DEBUG
    3. Forwards the request downstream with a receive channel replaying the body

    Capture failures propagate and abort the request.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: Optional[logging.Logger] = None,
        skip_paths: Optional[list[str]] = None,
        reconstructor: Optional[CommandReconstructor] = None
    ):
        """
        Initialize curl logging middleware.

        Args:
            app: The downstream ASGI application
            logger: Logger receiving the command lines; defaults to this module's
            skip_paths: Paths passed through without capture
            reconstructor: Command builder; defaults to one built from settings
        """
        settings = get_settings()
        self.app = app
        self.logger = logger or logging.getLogger(__name__)
        self.skip_paths = skip_paths if skip_paths is not None else list(settings.curl_skip_paths)
        self.reconstructor = reconstructor or CommandReconstructor(
            logger=self.logger,
            default_charset=settings.default_charset,
            canonical_header_names=settings.canonical_header_names
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http" or scope["path"] in self.skip_paths:
            await self.app(scope, receive, send)
            return

        buffered = await BufferedRequest.capture(Request(scope, receive=receive))
        self.logger.debug(self.reconstructor.build_command(buffered))

        await self.app(scope, buffered.replay_receive(), send)
