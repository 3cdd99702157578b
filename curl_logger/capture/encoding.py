"""Charset resolution and gzip-aware decoding of captured request bodies."""

import codecs
import gzip
import logging
import zlib
from email.message import Message
from typing import Optional

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def is_gzip(data: bytes) -> bool:
    """Return True if the bytes start with the gzip magic signature."""
    return len(data) >= 2 and data[:2] == GZIP_MAGIC


def content_type_charset(content_type: Optional[str]) -> Optional[str]:
    """Extract the ``charset`` parameter from a Content-Type header value."""
    if not content_type:
        return None
    message = Message()
    message["content-type"] = content_type
    return message.get_content_charset()


def check_charset(name: str) -> str:
    """
    Normalize ``name`` if it can decode request bodies, else raise.

    The trial decode uses ``errors="replace"`` like ``decode_body`` does, which
    rejects non-text codecs (base64), codecs that always fail (undefined) and
    codecs without replace support (idna).

    Raises:
        LookupError: Unknown codec or not a text encoding
        UnicodeError: Codec cannot decode with replacement
    """
    b"\xff".decode(name, errors="replace")
    return codecs.lookup(name).name


def resolve_charset(
    content_type: Optional[str],
    default: str = "utf-8",
    log: Optional[logging.Logger] = None
) -> str:
    """
    Pick the text encoding for a request body.

    Uses the charset declared in the Content-Type header when it passes
    ``check_charset``, otherwise warns and returns ``default``.

    Args:
        content_type: Raw Content-Type header value, may be None
        default: Encoding used when none is declared or it is unknown
        log: Logger receiving the fallback warning

    Returns:
        Normalized codec name
    """
    log = log or logger
    encoding = content_type_charset(content_type)
    if encoding:
        try:
            return check_charset(encoding)
        except (LookupError, UnicodeError) as e:
            log.warning(f"Unsupported charset [{encoding}]: {e}")
    return codecs.lookup(default).name


def decode_body(
    data: bytes,
    charset: str,
    log: Optional[logging.Logger] = None
) -> str:
    """
    Decode body bytes to text, decompressing gzip-framed content first.

    Malformed gzip data degrades to an empty string with a warning. Bytes that
    are invalid in ``charset`` are replaced rather than raising.
    """
    if is_gzip(data):
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            (log or logger).warning(f"Error decompressing gzip body: {e}")
            return ""
    return data.decode(charset, errors="replace")
