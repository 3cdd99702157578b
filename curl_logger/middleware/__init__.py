"""ASGI middleware for the curl logger service."""

from .curl_logging import CurlLoggingMiddleware

__all__ = ["CurlLoggingMiddleware"]
