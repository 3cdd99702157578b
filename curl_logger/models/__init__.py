"""Data models for the curl logger service."""

from .echo import EchoResponse, EchoJSONResponse

__all__ = [
    "EchoResponse",
    "EchoJSONResponse"
]
