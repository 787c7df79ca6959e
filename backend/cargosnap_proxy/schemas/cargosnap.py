"""
CargoSnap Proxy — Pydantic Request/Response Schemas
=====================================================

What:  Models for the JSON bodies this proxy accepts and the envelopes it returns.
How:   FastAPI validates request bodies against these models; failures become 400
       responses through the RequestValidationError handler in main.py.
       Upstream payloads (file records, reports, shares) are opaque and are passed
       through without a schema.

Outbound bodies are built with `to_upstream()`, which drops fields the client did
not send so the upstream never receives empty or null optionals.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

REFERENCE_MAX_LENGTH = 255


class UpstreamPayload(BaseModel):
    """Base for request bodies forwarded to CargoSnap."""

    def to_upstream(self) -> Dict[str, Any]:
        """Serializes with upstream field names, omitting unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class FileCreateRequest(UpstreamPayload):
    """
    Body of POST /files.

    reference: The client's own identifier for the file (container number,
               purchase order, ...). Must be a string of 1..255 characters.
    """
    reference: str = Field(min_length=1, max_length=REFERENCE_MAX_LENGTH)
    close: Optional[bool] = Field(default=None, description="Close the file right after creation")
    location: Optional[str] = Field(default=None, description="Location label for the file")


class FieldEntry(BaseModel):
    """A single name/value pair attached to a file. Both halves are required."""
    name: str = Field(min_length=1)
    value: Any = Field(...)


class FieldSetRequest(BaseModel):
    """Body of POST /fields. The reference becomes part of the upstream path."""
    reference: str = Field(min_length=1, max_length=REFERENCE_MAX_LENGTH)
    fields: List[FieldEntry] = Field(min_length=1)

    def to_upstream(self) -> Dict[str, Any]:
        return {"fields": [entry.model_dump() for entry in self.fields]}


class ReportRequest(UpstreamPayload):
    """
    Body of POST /reports.

    `async` is a Python keyword, so the attribute is `async_` and the alias keeps
    the wire name.
    """
    files: List[Union[int, str]] = Field(min_length=1, description="File ids to include")
    template: Optional[str] = None
    filename: Optional[str] = None
    async_: Optional[bool] = Field(default=None, alias="async")
    settings: Optional[Dict[str, Any]] = None

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """Uniform error body for every failure this proxy reports."""
    error: str = Field(description="Human-readable error description")


class DeleteResponse(BaseModel):
    """Confirmation returned after a successful upstream delete."""
    message: str
    file: Any = Field(description="The record returned by CargoSnap for the deleted file")


class StatusResponse(BaseModel):
    """Liveness payload of GET /status."""
    status: str
    uptime: str = Field(description="Process uptime as 'Xh Ym Zs'")
    timestamp: str = Field(description="Current local time (pt-BR format)")
    developed: str
    portfolio: str
    rotas: List[str] = Field(description="Registered routes as 'METHOD /path'")
