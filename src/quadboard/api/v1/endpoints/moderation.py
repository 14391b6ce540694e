"""Moderation endpoints for the Quadboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from quadboard.api.v1.dependencies import (
    OracleDep,
    SessionDep,
    VerifiedUserDep,
    http_error,
)
from quadboard.schemas.moderation import ReportCreate, ReportResponse
from quadboard.services import moderation as moderation_service
from quadboard.services.errors import QuadboardError

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/report", response_model=ReportResponse, status_code=status.HTTP_200_OK)
async def report_content(
    report: ReportCreate,
    current_user: VerifiedUserDep,
    db: SessionDep,
    oracle: OracleDep,
) -> moderation_service.ReportOutcome:
    """Report a post or comment for automated review.

    Harmful content is removed and its author moves one step up the
    warning / temporary ban / permanent suspension ladder.
    """
    try:
        return await moderation_service.report_content(
            db,
            content_id=report.content_id,
            content_type=report.content_type,
            author_id=report.author_id,
            reporter_id=current_user.id,
            oracle=oracle,
        )
    except QuadboardError as err:
        raise http_error(err) from err
