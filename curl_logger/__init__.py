"""Log incoming HTTP requests as replayable curl commands."""

from .capture import BufferedRequest, CommandReconstructor, ReplayStream, BodyCaptureError
from .middleware import CurlLoggingMiddleware

__version__ = "1.0.0"

__all__ = [
    "BufferedRequest",
    "CommandReconstructor",
    "ReplayStream",
    "BodyCaptureError",
    "CurlLoggingMiddleware",
]
