"""Report submission and history endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from shift_report.domain.errors import StoreError, UploadError, ValidationError
from shift_report.domain.reports import ReportForm, Reporter
from shift_report.services.reports import DEFAULT_PAGE_SIZE

if TYPE_CHECKING:
    from shift_report.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

RETRY_MESSAGE = "제출 중 오류가 발생했습니다. 다시 시도해 주세요."


async def require_reporter(
    request: Request, authorization: str | None = Header(default=None)
) -> Reporter:
    """Resolve the bearer token into the signed-in reporter."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    container: AppContainer = request.app.state.container
    reporter = container.identity_provider.resolve(token.strip())
    if reporter is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return reporter


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_report(
    form: ReportForm,
    request: Request,
    reporter: Reporter = Depends(require_reporter),
) -> dict[str, object]:
    """Submit a shift report for the signed-in reporter."""
    container: AppContainer = request.app.state.container
    try:
        result = await container.submission_service.submit(reporter, form)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"reason": exc.reason.value, "message": exc.message},
        ) from exc
    except (UploadError, StoreError) as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=RETRY_MESSAGE
        ) from exc
    return {
        "id": str(result.report.id),
        "has_photo": result.report.has_photo,
        "photos": len(result.report.photos),
        "skipped_photos": result.skipped_photos,
    }


@router.get("")
async def list_reports(
    request: Request,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    reporter: Reporter = Depends(require_reporter),
) -> dict[str, object]:
    """Return report history visible to the signed-in reporter."""
    container: AppContainer = request.app.state.container
    service = container.report_service
    try:
        reports = service.query(reporter, limit=limit, offset=offset)
    except StoreError as exc:
        logger.exception("Failed to load report history")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=RETRY_MESSAGE
        ) from exc
    return {
        "scope": service.scope_for(reporter).value,
        "reports": [report.to_dict() for report in reports],
    }
