"""
CargoSnap Proxy — Status Route
================================

What:  Liveness endpoint reporting uptime, local time and the registered routes.
Who:   Called by the process manager, load balancers and humans checking the deploy.
How:   Pure introspection: no upstream call is made, so the endpoint answers even
       when CargoSnap is unreachable.
"""

import time
from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from fastapi import APIRouter

from cargosnap_proxy.config import settings
from cargosnap_proxy.routes import API_ROUTERS, describe_routes
from cargosnap_proxy.schemas.cargosnap import StatusResponse

router = APIRouter(tags=["Status"])

# Initialized once when the module loads
_start_time = time.time()


def format_uptime(seconds: float) -> str:
    """Formats a duration as 'Xh Ym Zs' (hours are not wrapped into days)."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}h {minutes}m {secs}s"


def registered_routes() -> List[str]:
    """
    Every API route the application serves, as "METHOD /path".

    Mirrors how create_app() mounts them: this router at the root, then the
    CargoSnap routers under the prefix configured right now.
    """
    routes = describe_routes(router)
    for api_router in API_ROUTERS:
        routes.extend(describe_routes(api_router, settings.api_prefix))
    return routes


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Service status",
    description="Reports uptime, current time and every registered route.",
)
async def status() -> StatusResponse:
    now = datetime.now(ZoneInfo(settings.status_timezone))
    return StatusResponse(
        status="API rodando",
        uptime=format_uptime(time.time() - _start_time),
        timestamp=now.strftime("%d/%m/%Y, %H:%M:%S"),
        developed=settings.developed_by,
        portfolio=settings.portfolio_url,
        rotas=registered_routes(),
    )
