"""Error handling module for the curl logger service."""

from .problem_details import (
    PROBLEM_TYPE_PREFIX,
    ProblemDetail,
    ProblemDetailException,
    UnreadableRequestBodyError,
    InvalidJSONBodyError,
    InternalServerError,
    create_problem_response
)
from .handlers import register_exception_handlers, translate_exception

__all__ = [
    "PROBLEM_TYPE_PREFIX",
    "ProblemDetail",
    "ProblemDetailException",
    "UnreadableRequestBodyError",
    "InvalidJSONBodyError",
    "InternalServerError",
    "create_problem_response",
    "register_exception_handlers",
    "translate_exception"
]
