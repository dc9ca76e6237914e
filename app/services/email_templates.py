"""Email templates for notification emails.

Every builder is a pure function of already-resolved values: no Firestore
reads, no clock. Each returns an ``EmailTemplate`` with a subject, an HTML
document and a plain-text body for clients that do not render HTML. The
layouts live in ``app/templates/email``; ``.html`` files autoescape, ``.txt``
files are rendered verbatim.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

_env = Environment(
    loader=PackageLoader('app', 'templates/email'),
    autoescape=select_autoescape(enabled_extensions=('html',), default_for_string=False),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


class InvalidScoreError(ValueError):
    """A score pair cannot be turned into a percentage."""


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html: str
    text: str


def compute_percentage(score: int, total: int) -> float:
    """Return ``score / total`` as a percentage rounded to one decimal.

    ``total`` must be positive; anything else is a data-integrity problem
    upstream and raises ``InvalidScoreError``.
    """
    if total is None or total <= 0:
        raise InvalidScoreError(f'total must be positive, got {total!r} (score {score!r})')
    return round(score / total * 100, 1)


def format_timestamp(value: datetime) -> str:
    """Human-readable UTC time, e.g. ``Mar 05, 2025 02:30 PM UTC``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime('%b %d, %Y %I:%M %p UTC')


def _render(name: str, subject: str, **context) -> EmailTemplate:
    return EmailTemplate(
        subject=subject,
        html=_env.get_template(f'{name}.html').render(**context),
        text=_env.get_template(f'{name}.txt').render(**context),
    )


def announcement_email(student_name: str, title: str, content: str,
                       course_name: str, instructor_name: str) -> EmailTemplate:
    return _render(
        'announcement',
        f'📢 New Announcement: {title}',
        student_name=student_name,
        title=title,
        content=content,
        course_name=course_name,
        instructor_name=instructor_name,
    )


def assignment_submitted_email(student_name: str, assignment_title: str, course_name: str,
                               attempt_number: Optional[int], submitted_at: str) -> EmailTemplate:
    if not attempt_number or attempt_number < 1:
        attempt_number = 1
    return _render(
        'assignment_submitted',
        f'✅ Assignment Submitted: {assignment_title}',
        student_name=student_name,
        assignment_title=assignment_title,
        course_name=course_name,
        attempt_number=attempt_number,
        submitted_at=submitted_at,
    )


def assignment_graded_email(student_name: str, assignment_title: str, course_name: str,
                            score: int, total_points: int,
                            feedback: Optional[str] = None) -> EmailTemplate:
    """Graded-assignment email. Blank or missing feedback drops the
    feedback block from both bodies."""
    percentage = compute_percentage(score, total_points)
    if not isinstance(feedback, str) or not feedback.strip():
        feedback = None
    return _render(
        'assignment_graded',
        f'📊 Assignment Graded: {assignment_title} - {score}/{total_points}',
        student_name=student_name,
        assignment_title=assignment_title,
        course_name=course_name,
        score=score,
        total_points=total_points,
        percentage=f'{percentage:.1f}',
        feedback=feedback,
    )


def quiz_result_email(student_name: str, quiz_title: str, course_name: str,
                      score: int, total_questions: int, submitted_at: str) -> EmailTemplate:
    """Shared by the quizSubmitted and quizGraded notifications."""
    percentage = compute_percentage(score, total_questions)
    return _render(
        'quiz_result',
        f'✅ Quiz Submitted: {quiz_title} - {score}/{total_questions}',
        student_name=student_name,
        quiz_title=quiz_title,
        course_name=course_name,
        score=score,
        total_questions=total_questions,
        percentage=f'{percentage:.1f}',
        submitted_at=submitted_at,
    )
