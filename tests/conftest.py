"""Pytest configuration and shared fixtures for the curl logger tests."""

import logging
from typing import Iterable, Optional, Sequence, Tuple

import pytest
from starlette.requests import Request


def make_scope(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: Iterable[Tuple[str, str]] = (),
    scheme: str = "http",
    server: Tuple[str, int] = ("host", 80)
) -> dict:
    """Build an ASGI HTTP scope the way servers deliver it (lowercase header names)."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": scheme,
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string,
        "headers": [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in headers],
        "server": server,
        "client": ("127.0.0.1", 54321),
    }


def make_receive(chunks: Sequence[bytes] = (b"",), error: Optional[BaseException] = None):
    """Build an ASGI receive callable delivering ``chunks`` then a disconnect."""
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]
    calls = {"count": 0}

    async def receive():
        calls["count"] += 1
        if error is not None:
            raise error
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    receive.calls = calls
    return receive


def make_request(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: Iterable[Tuple[str, str]] = (),
    chunks: Sequence[bytes] = (b"",),
    **scope_kwargs
) -> Request:
    """Build a Starlette request over a synthetic scope and body."""
    scope = make_scope(method, path, query_string, headers, **scope_kwargs)
    return Request(scope, receive=make_receive(chunks))


@pytest.fixture
def curl_logger():
    """Logger injected into the components under test."""
    return logging.getLogger("tests.curl")


@pytest.fixture
def request_factory():
    """Factory for synthetic Starlette requests."""
    return make_request


@pytest.fixture
def scope_factory():
    """Factory for synthetic ASGI HTTP scopes."""
    return make_scope


@pytest.fixture
def receive_factory():
    """Factory for synthetic ASGI receive callables."""
    return make_receive
