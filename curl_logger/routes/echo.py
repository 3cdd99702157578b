"""Echo endpoints that read the request body downstream of capture."""

import hashlib
import logging

from fastapi import APIRouter, Request

from ..models.echo import EchoResponse, EchoJSONResponse
from ..errors.problem_details import InvalidJSONBodyError


logger = logging.getLogger(__name__)

echo_router = APIRouter(
    prefix="/echo",
    tags=["Echo"],
    responses={
        400: {"description": "Request body could not be read"}
    }
)


@echo_router.api_route(
    "",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    response_model=EchoResponse,
    summary="Echo the request",
    description="Return method, path, query parameters and a digest of the body as read by the handler."
)
async def echo(request: Request) -> EchoResponse:
    """Read the body the way any handler would and describe it."""
    body = await request.body()

    query = {}
    for name, value in request.query_params.multi_items():
        query.setdefault(name, []).append(value)

    return EchoResponse(
        method=request.method,
        path=request.url.path,
        query=query,
        size=len(body),
        sha256=hashlib.sha256(body).hexdigest(),
        text=body.decode("utf-8", errors="replace") if body else None
    )


@echo_router.post(
    "/json",
    response_model=EchoJSONResponse,
    summary="Echo a JSON body",
    responses={400: {"description": "Body is not valid JSON"}}
)
async def echo_json(request: Request) -> EchoJSONResponse:
    """Parse the body as JSON and return it."""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.info(f"Rejected non-JSON body on {request.url.path}: {e}")
        raise InvalidJSONBodyError("Request body is not valid JSON")

    return EchoJSONResponse(received=payload)
