"""
CargoSnap Proxy — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the ways a proxied request can fail.
How:   Each exception carries a client-safe message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and return
       `{"error": <message>}` with the matching HTTP status code.
Who:   Raised by route handlers and the upstream client; caught by global handlers.

Exception Hierarchy:
    CargoSnapProxyError (base)
    ├── ValidationError   → 400 Bad Request (detected before any upstream call)
    ├── UpstreamError     → 500, or the upstream status when propagation is enabled
    └── NotFoundError     → 404 Not Found (upstream returned an empty payload)

Anything else escaping a handler is answered by the terminal fallback in main.py
with 400 and a generic message.
"""

from typing import Any, Dict, Optional


class CargoSnapProxyError(Exception):
    """
    Base exception for all proxy errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "Ocorreu algum erro.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CargoSnapProxyError):
    """
    Raised when client input is missing or malformed.

    When:    Missing reference, reference over 255 chars, empty file list,
             non-numeric form id, too many attachments.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Dados inválidos.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UpstreamError(CargoSnapProxyError):
    """
    Raised when the CargoSnap API answers with a non-2xx status or cannot be reached.

    Attributes:
        status_code: Upstream HTTP status, or None for transport failures
                     (connection refused, DNS failure, timeout).
    """

    DEFAULT_MESSAGE = "Erro na API do Cargosnap"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message or self.DEFAULT_MESSAGE, context=ctx)
        self.status_code = status_code


class NotFoundError(CargoSnapProxyError):
    """
    Raised when the upstream lookup yields nothing.

    When:    DELETE on a file the upstream no longer knows (empty response body).
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Arquivo",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} não encontrado."
        if resource_id:
            message = f"{resource} com ID '{resource_id}' não encontrado."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
