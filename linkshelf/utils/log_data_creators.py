"""A utility module for log data creation"""

from datetime import datetime
from typing import Any, Optional

from asgi_correlation_id.context import correlation_id
from pydantic import BaseModel, field_serializer
from starlette.requests import Request
from starlette.routing import Route
from starlette.types import Message


class RequestSummaryLogDataModel(BaseModel):
    """Log metadata for the Request Summary of every HTTP response."""

    errno: int
    time: datetime
    path: str
    route: Optional[str] = None
    method: str
    agent: Optional[str] = None
    lang: Optional[str] = None
    querystring: dict[str, Any]
    code: int
    t: int
    rid: Optional[str] = None  # Provided by the asgi-correlation-id middleware.
    uid: Optional[str] = None
    link_id: Optional[str] = None
    category_id: Optional[str] = None

    @field_serializer("time")
    def serialize_time(self, time: datetime) -> str:
        """Emit the timestamp as an iso-formatted string."""
        return time.isoformat()


def create_request_summary_log_data(
    request: Request, message: Message, dt: datetime, duration_ms: int
) -> RequestSummaryLogDataModel:
    """Create log data for API endpoints.

    `route` is the matched path template (e.g. `/api/v1/links/{link_id}`) and is unset for
    unknown paths. Link and category ids are taken from the path parameters only; ids sent
    in a query string or body stay in `querystring` or are not logged.
    """
    route = request.scope.get("route")
    path_params = request.scope.get("path_params", {})
    return RequestSummaryLogDataModel(
        errno=0,
        time=dt,
        agent=request.headers.get("User-Agent"),
        path=request.url.path,
        route=route.path if isinstance(route, Route) else None,
        method=request.method,
        lang=request.headers.get("Accept-Language"),
        querystring=dict(request.query_params),
        code=message["status"],
        t=duration_ms,
        rid=correlation_id.get(),
        uid=request.headers.get("X-User-Id"),
        link_id=path_params.get("link_id"),
        category_id=path_params.get("category_id"),
    )
