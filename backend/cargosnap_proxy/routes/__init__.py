"""
CargoSnap Proxy — API Routes Package
======================================

What:  HTTP route handlers mirroring the CargoSnap file-management API.
How:   Each module declares one APIRouter; `api_router` gathers them so main.py
       can mount the whole set under the configured prefix in one call.

Route Inventory:
    - files.py:    POST/GET /files, GET /files/{id}, PATCH /files/{id}/close,
                   DELETE /files/{id}/delete
    - uploads.py:  POST /uploads
    - fields.py:   POST /fields
    - reports.py:  POST /reports
    - share.py:    GET  /share
    - forms.py:    GET  /forms/{id}
    - status.py:   GET  /status (mounted at root, outside the prefix)

Routes are THIN: validate → forward through the upstream client → return.
"""

from typing import List

from fastapi import APIRouter
from fastapi.routing import APIRoute

from cargosnap_proxy.routes import fields, files, forms, reports, share, uploads

# Mounted under API_PREFIX, in this order
API_ROUTERS = (
    files.router,
    uploads.router,
    fields.router,
    reports.router,
    share.router,
    forms.router,
)

api_router = APIRouter()
for _router in API_ROUTERS:
    api_router.include_router(_router)


def describe_routes(router: APIRouter, prefix: str = "") -> List[str]:
    """
    Lists a router's own endpoints as "METHOD /path", in declaration order.

    Reads the router where its handlers are declared rather than the application's
    route table, whose shape after include_router differs between FastAPI releases.
    """
    return [
        f"{', '.join(sorted(route.methods))} {prefix}{route.path}"
        for route in router.routes
        if isinstance(route, APIRoute)
    ]
