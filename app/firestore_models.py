"""
Firestore document models using Python dataclasses.

Read-only views of the platform documents the notification mailer consumes.
Field names in Firestore follow the platform's camelCase convention
(``userId``, ``relatedId``, ``courseId`` ...); each model includes:
  - An `id` field for the Firestore document ID
  - A `to_dict()` instance method for serialization (used by seeding)
  - A `from_dict(data, doc_id)` classmethod for deserialization
  - Sensible defaults for all fields
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_datetime(value) -> Optional[datetime]:
    """Convert a value to datetime. Accepts datetime objects, ISO-format
    strings, and Firestore DatetimeWithNanoseconds objects."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        # Handle ISO format strings (with or without trailing Z)
        value = value.replace("Z", "+00:00")
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return None
    # Firestore DatetimeWithNanoseconds is a datetime subclass, handled above
    return None


def _parse_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def _parse_text(value) -> Optional[str]:
    return value if isinstance(value, str) else None


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ===========================================================================
# Notification types
# ===========================================================================

class NotificationType(str, Enum):
    ANNOUNCEMENT = "announcement"
    ASSIGNMENT_SUBMITTED = "assignmentSubmitted"
    ASSIGNMENT_GRADED = "assignmentGraded"
    QUIZ_SUBMITTED = "quizSubmitted"
    QUIZ_GRADED = "quizGraded"

    @classmethod
    def parse(cls, value) -> Optional[NotificationType]:
        """Return the matching member, or None for unrecognized values."""
        try:
            return cls(value)
        except ValueError:
            return None


# ===========================================================================
# 1. Notification
# ===========================================================================

@dataclass
class Notification:
    id: Optional[str] = None
    user_id: str = ""
    type: str = ""
    related_id: str = ""
    message: str = ""
    created_at: Optional[datetime] = None

    # Structured values; when present they win over numbers mined from message
    attempt_number: Optional[int] = None
    score: Optional[int] = None
    total: Optional[int] = None
    feedback: Optional[str] = None

    @property
    def kind(self) -> Optional[NotificationType]:
        return NotificationType.parse(self.type)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "userId": self.user_id,
            "type": self.type,
            "relatedId": self.related_id,
            "message": self.message,
            "createdAt": self.created_at or _now(),
        }
        for key, value in (("attemptNumber", self.attempt_number),
                           ("score", self.score),
                           ("total", self.total),
                           ("feedback", self.feedback)):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> Notification:
        return cls(
            id=doc_id,
            user_id=data.get("userId") or "",
            type=data.get("type") or "",
            related_id=data.get("relatedId") or "",
            message=_parse_text(data.get("message")) or "",
            created_at=_parse_datetime(data.get("createdAt")),
            attempt_number=_parse_int(data.get("attemptNumber")),
            score=_parse_int(data.get("score")),
            total=_parse_int(data.get("total")),
            feedback=_parse_text(data.get("feedback")),
        )


# ===========================================================================
# 2. User
# ===========================================================================

@dataclass
class User:
    uid: Optional[str] = None         # Firestore document ID / Firebase Auth UID
    email: Optional[str] = None
    display_name: str = ""

    @property
    def name(self) -> str:
        """Name used to greet the user in emails."""
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.split("@")[0]
        return "Student"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "displayName": self.display_name,
            "createdAt": _now(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> User:
        return cls(
            uid=doc_id,
            email=data.get("email") or None,
            display_name=data.get("displayName") or "",
        )


# ===========================================================================
# 3. Course
# ===========================================================================

@dataclass
class Course:
    id: Optional[str] = None
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "createdAt": _now()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> Course:
        return cls(id=doc_id, name=data.get("name", ""))


# ===========================================================================
# 4. Announcement
# ===========================================================================

@dataclass
class Announcement:
    id: Optional[str] = None
    title: str = ""
    content: str = ""
    course_id: str = ""
    created_by: str = ""              # instructor UID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "courseId": self.course_id,
            "createdBy": self.created_by,
            "createdAt": _now(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> Announcement:
        return cls(
            id=doc_id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            course_id=data.get("courseId") or "",
            created_by=data.get("createdBy") or "",
        )


# ===========================================================================
# 5. Assignment / Quiz
# ===========================================================================

@dataclass
class Assignment:
    id: Optional[str] = None
    title: str = ""
    course_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "courseId": self.course_id, "createdAt": _now()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> Assignment:
        return cls(id=doc_id, title=data.get("title", ""), course_id=data.get("courseId") or "")


@dataclass
class Quiz:
    id: Optional[str] = None
    title: str = ""
    course_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "courseId": self.course_id, "createdAt": _now()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], doc_id: Optional[str] = None) -> Quiz:
        return cls(id=doc_id, title=data.get("title", ""), course_id=data.get("courseId") or "")
