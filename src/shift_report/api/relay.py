"""Request-driven relay endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from shift_report.domain.errors import ConfigError
from shift_report.domain.notifications import ReportNotification

if TYPE_CHECKING:
    from shift_report.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])


def client_key(request: Request) -> str:
    """Return the request source used for rate limiting."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def enforce_rate_limit(request: Request) -> None:
    """Reject the request before any relay work when the source is throttled."""
    container: AppContainer = request.app.state.container
    container.rate_limiter.check(client_key(request))


@router.post("/api/send-slack", dependencies=[Depends(enforce_rate_limit)])
async def send_slack(
    notification: ReportNotification, request: Request
) -> JSONResponse:
    """Accept a report payload and deliver it in the background.

    The response confirms the payload was rendered and queued, not that any
    channel accepted it.
    """
    container: AppContainer = request.app.state.container
    try:
        prepared = container.notification_relay.prepare(notification)
    except ConfigError:
        logger.error("SLACK_WEBHOOK_URL is missing")
        return JSONResponse(
            status_code=500, content={"error": "Server configuration error"}
        )
    except Exception:
        logger.exception("Failed to build report notification")
        return JSONResponse(
            status_code=500, content={"error": "Failed to send notification"}
        )
    container.notification_dispatcher.dispatch_prepared(prepared)
    return JSONResponse(
        status_code=200,
        content={"success": True, "message": "Notification accepted for delivery"},
    )


@router.api_route(
    "/api/send-slack",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def send_slack_method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )
