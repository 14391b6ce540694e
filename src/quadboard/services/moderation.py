# src/quadboard/services/moderation.py
"""Report handling and the warning escalation ladder."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from quadboard.core.settings import settings
from quadboard.db.time import utcnow
from quadboard.models import (
    Comment,
    ContentType,
    NotificationType,
    Post,
    SuspensionKind,
    User,
)
from quadboard.services.errors import (
    ContentNotFoundError,
    ReportedAuthorMismatchError,
    UserNotFoundError,
)
from quadboard.services.notifications import MESSAGES, add_notification
from quadboard.services.perspective import ModerationOracle

logger = logging.getLogger(__name__)


class EscalationAction(str, enum.Enum):
    """Enforcement applied to the author of harmful content."""

    NONE = "none"
    WARN = "warn"
    TEMP_BAN = "temp_ban"
    PERMANENT_SUSPEND = "permanent_suspend"


@dataclass(frozen=True)
class EscalationDecision:
    """Author update implied by the warnings count before a report."""

    action: EscalationAction
    new_warnings: int
    suspension: SuspensionKind | None
    suspension_end: datetime | None
    notification_type: NotificationType
    message: str


@dataclass(frozen=True)
class ReportOutcome:
    """What a report did."""

    content_id: int
    content_type: ContentType
    harmful: bool
    action: EscalationAction
    content_deleted: bool


def decide_escalation(
    warnings_before: int,
    now: datetime,
    *,
    ban_days: int | None = None,
) -> EscalationDecision:
    """Map the author's warnings before this report to an enforcement action.

    0 -> warn, 1 -> temporary ban, 2 or more -> permanent suspension.
    `suspension` is None when the author's suspension is left unchanged.
    """
    days = settings.temp_ban_days if ban_days is None else ban_days

    if warnings_before >= 2:
        return EscalationDecision(
            action=EscalationAction.PERMANENT_SUSPEND,
            new_warnings=warnings_before,
            suspension=SuspensionKind.PERMANENT,
            suspension_end=None,
            notification_type=NotificationType.SUSPENSION,
            message=MESSAGES[NotificationType.SUSPENSION],
        )
    if warnings_before == 1:
        return EscalationDecision(
            action=EscalationAction.TEMP_BAN,
            new_warnings=2,
            suspension=SuspensionKind.TEMPORARY,
            suspension_end=now + timedelta(days=days),
            notification_type=NotificationType.BAN,
            message=MESSAGES[NotificationType.BAN].format(days=days),
        )
    return EscalationDecision(
        action=EscalationAction.WARN,
        new_warnings=warnings_before + 1,
        suspension=None,
        suspension_end=None,
        notification_type=NotificationType.WARNING,
        message=MESSAGES[NotificationType.WARNING],
    )


def _load_content(
    db: Session,
    content_id: int,
    content_type: ContentType,
    *,
    lock: bool = False,
) -> Post | Comment | None:
    model = Post if content_type == ContentType.POST else Comment
    stmt = select(model).where(model.id == content_id)
    if lock:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def _apply_decision(author: User, decision: EscalationDecision) -> None:
    author.warnings = decision.new_warnings
    if decision.suspension is not None:
        author.suspension = decision.suspension
        author.suspension_end = decision.suspension_end


def _delete_content(db: Session, content: Post | Comment) -> None:
    if isinstance(content, Comment):
        post = db.get(Post, content.post_id)
        if post is not None:
            post.comments_count = max(0, post.comments_count - 1)
    db.delete(content)


def _no_action(content_id: int, content_type: ContentType, *, harmful: bool) -> ReportOutcome:
    return ReportOutcome(
        content_id=content_id,
        content_type=content_type,
        harmful=harmful,
        action=EscalationAction.NONE,
        content_deleted=False,
    )


async def report_content(
    db: Session,
    *,
    content_id: int,
    content_type: ContentType,
    author_id: str,
    reporter_id: str,
    oracle: ModerationOracle,
    now: datetime | None = None,
) -> ReportOutcome:
    """Score reported content and, if harmful, escalate against its author.

    Harmful content is deleted whatever the escalation step. Oracle failure
    counts as "not harmful", in which case nothing is written. The content is
    re-read under a row lock after scoring; if a concurrent report already
    removed it, this report escalates nothing.

    Raises:
        ContentNotFoundError: If the content does not exist.
        ReportedAuthorMismatchError: If `author_id` is not the content's author.
        UserNotFoundError: If the content is harmful and the author has no
            user document.
    """
    content_type = ContentType(content_type)
    content = _load_content(db, content_id, content_type)
    if content is None:
        raise ContentNotFoundError(f"{content_type.value.capitalize()} {content_id} not found")
    if content.author_id != author_id:
        raise ReportedAuthorMismatchError(
            f"{content_type.value.capitalize()} {content_id} was not written by {author_id}"
        )
    logger.info(
        "Report on %s %s by %s (author %s)",
        content_type.value, content_id, reporter_id, author_id,
    )

    harmful = await oracle.is_harmful(content.text)
    if not harmful:
        logger.info("Reported %s %s judged not harmful", content_type.value, content_id)
        return _no_action(content_id, content_type, harmful=False)

    content = _load_content(db, content_id, content_type, lock=True)
    if content is None:
        logger.info(
            "Reported %s %s already removed by another report", content_type.value, content_id
        )
        return _no_action(content_id, content_type, harmful=True)

    author = db.execute(
        select(User).where(User.id == content.author_id).with_for_update()
    ).scalar_one_or_none()
    if author is None:
        raise UserNotFoundError(f"Author {content.author_id} not found")

    decision = decide_escalation(author.warnings or 0, now or utcnow())
    _apply_decision(author, decision)
    add_notification(db, author.id, decision.notification_type, decision.message)
    _delete_content(db, content)
    db.commit()

    logger.info(
        "Escalation %s applied to %s (warnings now %d); %s %s deleted",
        decision.action.value, author.id, decision.new_warnings,
        content_type.value, content_id,
    )
    return ReportOutcome(
        content_id=content_id,
        content_type=content_type,
        harmful=True,
        action=decision.action,
        content_deleted=True,
    )
