"""Rebuild a captured request as a single curl command line."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from starlette.requests import Request

from .buffered_request import BufferedRequest
from .encoding import resolve_charset


@dataclass(frozen=True)
class ParsedRequest:
    """Read-only view of the parts of a request that go into the command."""
    method: str
    url: str  # scheme, host and path, without the query string
    headers: Tuple[Tuple[str, str], ...] = ()
    query_params: Tuple[Tuple[str, Tuple[str, ...]], ...] = ()  # (name, values) in first-seen name order
    content_type: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request) -> "ParsedRequest":
        """
        Build the view from a Starlette request.

        Header names are listed once each in first-seen order with the first
        value sent for that name. Query parameter names are grouped in
        first-seen order, keeping the wire order of values within a name.
        """
        headers = []
        seen = set()
        for name in request.headers.keys():
            if name in seen:
                continue
            seen.add(name)
            headers.append((name, request.headers.get(name)))

        grouped: Dict[str, List[str]] = {}
        for name, value in request.query_params.multi_items():
            grouped.setdefault(name, []).append(value)

        return cls(
            method=request.method,
            url=str(request.url.replace(query="")),
            headers=tuple(headers),
            query_params=tuple((name, tuple(values)) for name, values in grouped.items()),
            content_type=request.headers.get("content-type")
        )

    def full_url(self) -> str:
        """URL with the query string rebuilt from the parsed parameters."""
        parts = [self.url]
        sep = "?"
        for name, values in self.query_params:
            for value in values:
                parts.append(f"{sep}{name}={value}")
                sep = "&"
        return "".join(parts)


def canonical_header_name(name: str) -> str:
    """Render a header name in canonical form, e.g. ``x-trace-id`` -> ``X-Trace-Id``."""
    return "-".join(part.capitalize() for part in name.split("-"))


def escape_quotes(text: str) -> str:
    return text.replace('"', '\\"')


def format_curl(
    parsed: ParsedRequest,
    body: Optional[str],
    canonical_header_names: bool = True
) -> str:
    """
    Assemble the curl command for a parsed request and decoded body.

    Flags appear as method, URL, one ``-H`` per header, then ``-d`` when a
    body is given. Only double quotes in the body are escaped.
    """
    parts = ["curl", f"-X {parsed.method}", f'"{parsed.full_url()}"']

    for name, value in parsed.headers:
        if canonical_header_names:
            name = canonical_header_name(name)
        parts.append(f'-H "{name}: {value}"')

    if body is not None:
        parts.append(f'-d "{escape_quotes(body)}"')

    return " ".join(parts)


class CommandReconstructor:
    """Turns a buffered request into the curl command that replays it."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        default_charset: str = "utf-8",
        canonical_header_names: bool = True
    ):
        """
        Args:
            logger: Receives charset and gzip fallback warnings
            default_charset: Encoding used when the request declares none or
                an unknown one
            canonical_header_names: Render header names in canonical case
                instead of the lowercase form ASGI servers deliver
        """
        self.logger = logger or logging.getLogger(__name__)
        self.default_charset = default_charset
        self.canonical_header_names = canonical_header_names

    def build_command(self, request: BufferedRequest) -> str:
        """Build the curl command line for ``request``. Never raises on body content."""
        parsed = ParsedRequest.from_request(request)
        charset = resolve_charset(parsed.content_type, self.default_charset, self.logger)
        body = request.body_as_text(charset, self.logger) if request.has_body() else None
        return format_curl(parsed, body, self.canonical_header_names)
