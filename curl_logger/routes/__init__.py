"""API routes for the curl logger service."""

from .echo import echo_router

__all__ = ["echo_router"]
