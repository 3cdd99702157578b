"""Pydantic models for the echo endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class EchoResponse(BaseModel):
    """What the downstream handler saw of the request."""

    method: str = Field(..., description="HTTP method")
    path: str = Field(..., description="Request path")
    query: Dict[str, List[str]] = Field(default_factory=dict, description="Query parameters by name")
    size: int = Field(..., ge=0, description="Body length in bytes")
    sha256: str = Field(..., description="Hex SHA-256 digest of the raw body")
    text: Optional[str] = Field(default=None, description="Body decoded as UTF-8, None when empty")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "method": "POST",
                "path": "/echo",
                "query": {"x": ["1"]},
                "size": 10,
                "sha256": "accbe7c3a78093a4d5bbe15b7ff176c828973b7d018b5a887d821eb588298a73",
                "text": "hi \"there\""
            }
        }
    )


class EchoJSONResponse(BaseModel):
    """Parsed JSON body as received downstream."""

    received: Any = Field(..., description="Decoded JSON document")
