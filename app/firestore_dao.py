"""
Firestore Data Access Object (DAO) layer.

Point reads of the documents a notification refers to. Users and courses
are structural prerequisites of every email and raise ``DocumentNotFound``
when missing; announcements, assignments and quizzes may have been deleted
after the notification was written, so their getters return None instead.

The ``create_*`` helpers exist for seeding an emulator with demo data.
"""

from datetime import datetime, timezone

from app.firebase_init import get_db
from app.firestore_models import (
    Announcement, Assignment, Course, Quiz, User,
)


class DocumentNotFound(LookupError):
    """A required document is missing from its collection."""

    def __init__(self, collection, doc_id):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f'{collection} not found: {doc_id!r}')


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _doc_to_dict(doc_snapshot):
    """Convert a Firestore DocumentSnapshot to a dict with 'id' field."""
    if not doc_snapshot.exists:
        return None
    d = doc_snapshot.to_dict()
    d['id'] = doc_snapshot.id
    return d


def _get_document(collection, doc_id):
    """Fetch one document as a dict, or None if it (or its id) is missing."""
    if not doc_id:
        return None
    doc = get_db().collection(collection).document(doc_id).get()
    return _doc_to_dict(doc)


def _require_document(collection, doc_id):
    data = _get_document(collection, doc_id)
    if data is None:
        raise DocumentNotFound(collection, doc_id)
    return data


def _now():
    return datetime.now(timezone.utc)


# ========================================================================
# Users  (collection: users)
# ========================================================================

def get_user(uid):
    """Get a user by UID. Raises DocumentNotFound if missing."""
    data = _require_document('users', uid)
    return User.from_dict(data, uid)


def create_user(uid, data):
    """Create a user document with the given UID as the document ID."""
    data.setdefault('createdAt', _now())
    get_db().collection('users').document(uid).set(data)


# ========================================================================
# Courses  (collection: courses)
# ========================================================================

def get_course(course_id):
    """Get a course by ID. Raises DocumentNotFound if missing."""
    data = _require_document('courses', course_id)
    return Course.from_dict(data, course_id)


def create_course(data):
    """Create a new course. Returns the generated doc ID."""
    data.setdefault('createdAt', _now())
    _, doc_ref = get_db().collection('courses').add(data)
    return doc_ref.id


# ========================================================================
# Announcements  (collection: announcements)
# ========================================================================

def get_announcement(announcement_id):
    """Get an announcement by ID. Returns Announcement or None."""
    data = _get_document('announcements', announcement_id)
    if data is None:
        return None
    return Announcement.from_dict(data, announcement_id)


def create_announcement(data):
    """Create an announcement. Returns doc ID."""
    data.setdefault('createdAt', _now())
    _, doc_ref = get_db().collection('announcements').add(data)
    return doc_ref.id


# ========================================================================
# Assignments  (collection: assignments)
# ========================================================================

def get_assignment(assignment_id):
    """Get an assignment by ID. Returns Assignment or None."""
    data = _get_document('assignments', assignment_id)
    if data is None:
        return None
    return Assignment.from_dict(data, assignment_id)


def create_assignment(data):
    """Create an assignment. Returns doc ID."""
    data.setdefault('createdAt', _now())
    _, doc_ref = get_db().collection('assignments').add(data)
    return doc_ref.id


# ========================================================================
# Quizzes  (collection: quizzes)
# ========================================================================

def get_quiz(quiz_id):
    """Get a quiz by ID. Returns Quiz or None."""
    data = _get_document('quizzes', quiz_id)
    if data is None:
        return None
    return Quiz.from_dict(data, quiz_id)


def create_quiz(data):
    """Create a quiz. Returns doc ID."""
    data.setdefault('createdAt', _now())
    _, doc_ref = get_db().collection('quizzes').add(data)
    return doc_ref.id


# ========================================================================
# Notifications  (collection: notifications)
# ========================================================================

def get_notification_data(notification_id):
    """Get the raw notification document as stored, or None."""
    data = _get_document('notifications', notification_id)
    if data is not None:
        data.pop('id', None)
    return data


def create_notification(data):
    """Create a notification. Returns doc ID."""
    data.setdefault('createdAt', _now())
    _, doc_ref = get_db().collection('notifications').add(data)
    return doc_ref.id
