"""Dockerflow Endpoints."""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import ORJSONResponse, RedirectResponse, Response

from linkshelf import favicon, links
from linkshelf.utils.version import Version, fetch_app_version_from_file

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/")
async def redirect_home_to_docs():
    """Redirects home endpoint to the interactive documentation provided by FastAPI."""
    response = RedirectResponse(url="/docs")
    return response


@router.get(
    "/__version__",
    tags=["__version__"],
    summary="Dockerflow: __version__",
)
async def version() -> Version:
    """Dockerflow: Query service version."""
    try:
        app_version = fetch_app_version_from_file()
    except FileNotFoundError:
        raise HTTPException(status_code=500, detail="Version file does not exist")
    else:
        return app_version


@router.get("/__heartbeat__", tags=["__heartbeat__"], summary="Dockerflow: __heartbeat__")
async def heartbeat() -> ORJSONResponse:
    """Dockerflow: Report whether the store and the favicon coordinator are up.

    Responds 200 when both are initialized and 500 otherwise. The number of favicon
    refreshes still running in the background is included for operators.
    """
    checks = {
        "store": "ok" if links.store is not None else "error",
        "favicon": "ok" if favicon.coordinator is not None else "error",
    }
    pending = favicon.coordinator.task_runner.pending if favicon.coordinator is not None else 0
    healthy = all(check == "ok" for check in checks.values())
    if not healthy:
        logger.warning("Heartbeat failed", extra={"checks": checks})

    return ORJSONResponse(
        status_code=200 if healthy else 500,
        content={
            "status": "ok" if healthy else "error",
            "checks": checks,
            "details": {"pending_refreshes": pending},
        },
    )


@router.get("/__lbheartbeat__", tags=["__lbheartbeat__"], summary="Dockerflow: __lbheartbeat__")
async def lbheartbeat() -> Response:
    """Dockerflow: Query service heartbeat for load balancer. It returns an empty string in the
    response.
    """
    return Response(content="")
