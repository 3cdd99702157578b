"""Exception handlers for the curl logger service."""

import logging
from http import HTTPStatus
from typing import Callable, Dict, Type, Union
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..capture.buffered_request import BodyCaptureError
from .problem_details import (
    ProblemDetailException,
    UnreadableRequestBodyError,
    InternalServerError,
    create_problem_response
)

logger = logging.getLogger(__name__)

# Errors from outside the routes (middleware) that map to a specific problem type
PROBLEM_TRANSLATIONS: Dict[Type[BaseException], Callable[..., ProblemDetailException]] = {
    BodyCaptureError: UnreadableRequestBodyError.from_capture_error,
}


def translate_exception(exc: BaseException) -> ProblemDetailException:
    """Map an exception to its problem type, most specific class first."""
    for cls in type(exc).__mro__:
        factory = PROBLEM_TRANSLATIONS.get(cls)
        if factory is not None:
            return factory(exc)
    return InternalServerError()


def status_title(status_code: int) -> str:
    """Standard reason phrase for a status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP Error"


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle FastAPI HTTPException and Starlette HTTPException."""
    logger.info(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": str(request.url.path),
            "method": request.method
        }
    )

    title = status_title(exc.status_code)
    detail = str(exc.detail) if exc.detail else None

    response = create_problem_response(
        status=exc.status_code,
        title=title,
        detail=detail,
        request=request
    )

    for key, value in (getattr(exc, "headers", None) or {}).items():
        response.headers[key] = value

    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors."""
    error_messages = []
    for error in exc.errors():
        loc = " -> ".join(str(x) for x in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    logger.info(
        f"Validation error: {len(error_messages)} errors",
        extra={"path": str(request.url.path), "method": request.method}
    )

    return create_problem_response(
        status=422,
        title="Validation Error",
        detail="Validation failed: " + "; ".join(error_messages),
        request=request
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle exceptions no other handler claimed.

    Errors raised by middleware, such as a failed body capture, only reach this
    handler. Known ones render as their own problem type, anything else as a
    500 without internal details.
    """
    problem = translate_exception(exc)

    if problem.status >= 500:
        logger.error(
            f"Unhandled exception: {type(exc).__name__} - {str(exc)}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__
            },
            exc_info=True
        )
    else:
        logger.info(
            f"Request failed before routing: {problem.status} - {problem.title}",
            extra={
                "status_code": problem.status,
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__
            }
        )

    return problem.to_response(request)


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""

    # Custom Problem Detail exceptions
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)

    # FastAPI and Starlette HTTP exceptions
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Validation exceptions
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Catch-all; also the only handler that sees errors raised by middleware
    app.add_exception_handler(Exception, general_exception_handler)
