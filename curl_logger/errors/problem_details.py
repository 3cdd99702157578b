"""Problem Details (RFC 9457) responses for the curl logger service."""

from typing import Optional, Any
from pydantic import BaseModel, Field
from fastapi import Request
from fastapi.responses import JSONResponse

from ..capture.buffered_request import BodyCaptureError


PROBLEM_TYPE_PREFIX = "urn:curl-logger:problem:"


class ProblemDetail(BaseModel):
    """Problem Details as defined in RFC 9457."""

    type: str = Field(default="about:blank", description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(default=None, description="A human-readable explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="A URI reference that identifies the specific occurrence")

    # Allow additional properties for extensions
    model_config = {"extra": "allow"}


class ProblemDetailException(Exception):
    """
    Base exception for Problem Details responses.

    Subclasses fix ``status``, ``title`` and ``type_uri`` for one problem type;
    each raise only supplies the occurrence (detail, instance, extensions).
    """

    status: int = 500
    title: str = "Internal Server Error"
    type_uri: str = "about:blank"

    def __init__(
        self,
        detail: Optional[str] = None,
        instance: Optional[str] = None,
        **extensions: Any
    ):
        self.detail = detail
        self.instance = instance
        self.extensions = extensions
        super().__init__(detail or self.title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        """Convert to ProblemDetail model."""
        instance = self.instance
        if instance is None and request:
            instance = str(request.url.path)

        return ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance,
            **self.extensions
        )

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        """Convert to JSONResponse with Problem Details format."""
        problem = self.to_problem_detail(request)
        return JSONResponse(
            status_code=self.status,
            content=problem.model_dump(exclude_none=True),
            headers={"Content-Type": "application/problem+json"}
        )


class UnreadableRequestBodyError(ProblemDetailException):
    """400 for a request whose body could not be drained for capture."""

    status = 400
    title = "Unreadable Request Body"
    type_uri = PROBLEM_TYPE_PREFIX + "unreadable-request-body"

    @classmethod
    def from_capture_error(cls, exc: BodyCaptureError) -> "UnreadableRequestBodyError":
        """Build the problem for a failed capture, naming the transport failure type."""
        cause = exc.__cause__ or exc
        return cls(
            "Request body could not be read before the connection failed",
            cause=type(cause).__name__
        )


class InvalidJSONBodyError(ProblemDetailException):
    """400 for a body that an endpoint requires to be JSON."""

    status = 400
    title = "Invalid JSON Body"
    type_uri = PROBLEM_TYPE_PREFIX + "invalid-json-body"


class InternalServerError(ProblemDetailException):
    """500 Internal Server Error."""

    def __init__(self, detail: str = "An unexpected error occurred", **extensions: Any):
        super().__init__(detail, **extensions)


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    instance: Optional[str] = None,
    request: Optional[Request] = None,
    **extensions: Any
) -> JSONResponse:
    """Create a Problem Details response for errors raised outside this package."""
    if instance is None and request:
        instance = str(request.url.path)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        **extensions
    )

    return JSONResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
        headers={"Content-Type": "application/problem+json"}
    )
