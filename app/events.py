"""Entry point for newly created notification documents.

``handle_notification_created`` is the single boundary every host calls into
(the Firestore trigger in ``main.py``, the HTTP push route and the replay
command). Nothing raised while processing one notification escapes it: the
error is logged and reported as ``FAILURE_ABSORBED`` so the host never sees a
failed invocation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flask import current_app

from app.firestore_models import Notification
from app.services.dispatcher import DispatchResult, dispatch_notification

logger = logging.getLogger(__name__)


class TriggerOutcome(str, Enum):
    COMPLETED = 'completed'
    FAILURE_ABSORBED = 'failure_absorbed'


@dataclass(frozen=True)
class TriggerResult:
    outcome: TriggerOutcome
    dispatch: Optional[DispatchResult] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.outcome is TriggerOutcome.COMPLETED

    def to_dict(self):
        dispatch = self.dispatch
        return {
            'outcome': self.outcome.value,
            'delivery': dispatch.delivery.value if dispatch and dispatch.delivery else None,
            'skipped': dispatch.skipped.value if dispatch and dispatch.skipped else None,
            'error': self.error,
        }


def get_mailer():
    """The EmailSender built by ``create_app``."""
    return current_app.extensions['mailer']


def handle_notification_created(data, mailer, notification_id=None, now=None):
    """Process one notification document; never raises."""
    try:
        if not isinstance(data, dict):
            raise TypeError(f'notification data must be a mapping, got {type(data).__name__}')
        notification = Notification.from_dict(data, notification_id)
        result = dispatch_notification(notification, mailer, now=now)
    except Exception as e:
        logger.exception(f'Error in onNotificationCreated for notification {notification_id}')
        return TriggerResult(TriggerOutcome.FAILURE_ABSORBED, error=str(e))
    return TriggerResult(TriggerOutcome.COMPLETED, dispatch=result)


def handle_document_created_event(event, mailer):
    """Unpack a Firestore ``on_document_created`` event and process it.

    Returns None when the event carries no snapshot.
    """
    snapshot = event.data
    if snapshot is None:
        logger.warning('Notification created event without a document snapshot')
        return None
    return handle_notification_created(
        snapshot.to_dict(),
        mailer,
        notification_id=event.params.get('notificationId'),
    )
