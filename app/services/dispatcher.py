"""Route a notification to the email it should produce.

Each recognized ``NotificationType`` has one handler that loads the related
document, renders its template and returns it. A handler returns None when
the related document is gone, which is a normal skip rather than an error.
Missing users or courses raise ``DocumentNotFound`` and are left for the
caller's boundary to absorb.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from app import firestore_dao as dao
from app.firestore_models import NotificationType
from app.services import email_templates
from app.services.mailer import DeliveryStatus
from app.services.message_parser import (
    ASSIGNMENT_DEFAULT_TOTAL, QUIZ_DEFAULT_TOTAL,
    extract_attempt_number, extract_score,
)

logger = logging.getLogger(__name__)


class SkipReason(str, Enum):
    UNKNOWN_TYPE = 'unknown_type'
    NO_EMAIL = 'no_email'
    RELATED_MISSING = 'related_missing'


@dataclass(frozen=True)
class DispatchResult:
    delivery: Optional[DeliveryStatus] = None
    skipped: Optional[SkipReason] = None

    @property
    def sent(self):
        return self.delivery is DeliveryStatus.SENT


def _submitted_at(notification, now):
    return email_templates.format_timestamp(notification.created_at or now)


def _score(notification, default_total):
    score, total = extract_score(notification.message, default_total)
    if notification.score is not None:
        score = notification.score
    if notification.total is not None:
        total = notification.total
    return score, total


def _related_missing(kind, notification):
    logger.info(f'{kind} {notification.related_id} not found for notification '
                f'{notification.id}; skipping email')


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _announcement(notification, user, now):
    announcement = dao.get_announcement(notification.related_id)
    if announcement is None:
        _related_missing('Announcement', notification)
        return None
    course = dao.get_course(announcement.course_id)
    instructor = dao.get_user(announcement.created_by)
    return email_templates.announcement_email(
        user.name,
        announcement.title,
        announcement.content,
        course.name,
        instructor.name,
    )


def _assignment_submitted(notification, user, now):
    assignment = dao.get_assignment(notification.related_id)
    if assignment is None:
        _related_missing('Assignment', notification)
        return None
    course = dao.get_course(assignment.course_id)
    attempt = notification.attempt_number or extract_attempt_number(notification.message)
    return email_templates.assignment_submitted_email(
        user.name,
        assignment.title,
        course.name,
        attempt,
        _submitted_at(notification, now),
    )


def _assignment_graded(notification, user, now):
    assignment = dao.get_assignment(notification.related_id)
    if assignment is None:
        _related_missing('Assignment', notification)
        return None
    course = dao.get_course(assignment.course_id)
    score, total = _score(notification, ASSIGNMENT_DEFAULT_TOTAL)
    return email_templates.assignment_graded_email(
        user.name,
        assignment.title,
        course.name,
        score,
        total,
        notification.feedback,
    )


def _quiz_result(notification, user, now):
    quiz = dao.get_quiz(notification.related_id)
    if quiz is None:
        _related_missing('Quiz', notification)
        return None
    course = dao.get_course(quiz.course_id)
    score, total = _score(notification, QUIZ_DEFAULT_TOTAL)
    return email_templates.quiz_result_email(
        user.name,
        quiz.title,
        course.name,
        score,
        total,
        _submitted_at(notification, now),
    )


HANDLERS = {
    NotificationType.ANNOUNCEMENT: _announcement,
    NotificationType.ASSIGNMENT_SUBMITTED: _assignment_submitted,
    NotificationType.ASSIGNMENT_GRADED: _assignment_graded,
    NotificationType.QUIZ_SUBMITTED: _quiz_result,
    NotificationType.QUIZ_GRADED: _quiz_result,
}

_unhandled = set(NotificationType) - set(HANDLERS)
if _unhandled:
    raise RuntimeError(f'No email handler registered for: {sorted(t.value for t in _unhandled)}')


def dispatch_notification(notification, mailer, now=None):
    """Render and deliver the email for one notification.

    Returns a ``DispatchResult`` describing what happened. Raises
    ``DocumentNotFound`` when the user, course or instructor is missing and
    ``InvalidScoreError`` when the score total is not positive.
    """
    kind = notification.kind
    if kind is None:
        logger.info(f'No email handler for notification type: {notification.type}')
        return DispatchResult(skipped=SkipReason.UNKNOWN_TYPE)

    user = dao.get_user(notification.user_id)
    if not user.email:
        logger.warning(f'User {notification.user_id} has no email')
        return DispatchResult(skipped=SkipReason.NO_EMAIL)

    logger.info(f'Processing notification type: {kind.value}')
    template = HANDLERS[kind](notification, user, now or datetime.now(timezone.utc))
    if template is None:
        return DispatchResult(skipped=SkipReason.RELATED_MISSING)

    status = mailer.send(user.email, template.subject, template.html, template.text)
    return DispatchResult(delivery=status)
