"""Shared fixtures: an in-memory Firestore, a mock SendGrid client and a
Flask app that never touches real Firebase credentials."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from app import create_app, firestore_dao
from app.services.mailer import EmailSender, MailSettings
from config import Config


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, store, collection, doc_id):
        self._store = store
        self._collection = collection
        self.id = doc_id

    def get(self):
        self._store.reads.append((self._collection, self.id))
        data = self._store.data.get(self._collection, {}).get(self.id)
        return FakeSnapshot(self.id, data)

    def set(self, data):
        self._store.data.setdefault(self._collection, {})[self.id] = dict(data)


class FakeCollection:
    def __init__(self, store, name):
        self._store = store
        self._name = name

    def document(self, doc_id):
        return FakeDocument(self._store, self._name, doc_id)

    def add(self, data):
        docs = self._store.data.setdefault(self._name, {})
        doc_id = f'{self._name}-{len(docs) + 1}'
        ref = self.document(doc_id)
        ref.set(data)
        return None, ref


class FakeFirestore:
    """Just enough of the Firestore client for point reads; records every read."""

    def __init__(self):
        self.data = {}
        self.reads = []

    def collection(self, name):
        return FakeCollection(self, name)

    def put(self, collection, doc_id, data):
        self.data.setdefault(collection, {})[doc_id] = dict(data)


class TestingConfig(Config):
    TESTING = True
    FIREBASE_INIT = False
    SENDGRID_API_KEY = None
    EMAIL_FROM = None
    DISPATCH_SECRET = 'test-dispatch-secret'


@pytest.fixture
def db(monkeypatch):
    fake = FakeFirestore()
    monkeypatch.setattr(firestore_dao, 'get_db', lambda: fake)
    return fake


@pytest.fixture
def course_data(db):
    """The documents used by most pipeline tests."""
    db.put('users', 'u1', {'email': 'a@x.com', 'displayName': 'Alice'})
    db.put('users', 'inst1', {'email': 'prof@x.com', 'displayName': 'Prof. Oak'})
    db.put('courses', 'c1', {'name': 'Math 101'})
    db.put('quizzes', 'q1', {'title': 'Algebra Quiz', 'courseId': 'c1'})
    db.put('assignments', 'a1', {'title': 'Homework 3', 'courseId': 'c1'})
    db.put('announcements', 'ann1', {
        'title': 'Midterm moved',
        'content': 'The midterm is now on Friday.',
        'courseId': 'c1',
        'createdBy': 'inst1',
    })
    return db


@pytest.fixture
def sendgrid_client():
    client = Mock()
    client.send.return_value = Mock(status_code=202)
    return client


@pytest.fixture
def live_mailer(sendgrid_client):
    return EmailSender(MailSettings(api_key='SG.test-key'), client=sendgrid_client)


@pytest.fixture
def dry_run_mailer(sendgrid_client):
    return EmailSender(MailSettings(), client=sendgrid_client)


@pytest.fixture
def now():
    return datetime(2025, 3, 5, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
