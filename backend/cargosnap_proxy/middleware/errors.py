"""
CargoSnap Proxy — Unexpected Error Middleware
===============================================

What:  Turns any exception no handler claimed into the generic 400 body.
How:   Wraps the route layer; the response it builds travels back out through
       CORS, the access log and the request-id middleware like any other answer.
When:  Innermost middleware. Starlette's own catch-all sits outside every user
       middleware, so its responses would carry neither CORS nor X-Request-ID headers.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from cargosnap_proxy.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Ocorreu algum erro."


def generic_error_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": GENERIC_ERROR_MESSAGE})


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """Logs the traceback of an unhandled exception and answers with a generic 400."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=exc,
            )
            return generic_error_response()
