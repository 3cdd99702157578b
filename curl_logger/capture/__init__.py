"""Request body capture and curl command reconstruction."""

from .encoding import GZIP_MAGIC, is_gzip, content_type_charset, check_charset, resolve_charset, decode_body
from .buffered_request import CHUNK_SIZE, BodyCaptureError, ReplayStream, BufferedRequest
from .reconstructor import ParsedRequest, CommandReconstructor, canonical_header_name, format_curl

__all__ = [
    "GZIP_MAGIC",
    "is_gzip",
    "content_type_charset",
    "check_charset",
    "resolve_charset",
    "decode_body",
    "CHUNK_SIZE",
    "BodyCaptureError",
    "ReplayStream",
    "BufferedRequest",
    "ParsedRequest",
    "CommandReconstructor",
    "canonical_header_name",
    "format_curl",
]
