import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = 'noreply@educateclassroom.com'


class DeliveryStatus(str, Enum):
    SENT = 'sent'
    DRY_RUN = 'dry_run'
    FAILED = 'failed'


@dataclass(frozen=True)
class MailSettings:
    """Delivery configuration, read once when the app starts."""
    api_key: Optional[str] = None
    from_email: str = DEFAULT_FROM_EMAIL

    @property
    def live(self):
        return bool(self.api_key)

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get('SENDGRID_API_KEY') or None,
            from_email=config.get('EMAIL_FROM') or DEFAULT_FROM_EMAIL,
        )


class EmailSender:
    """Sends rendered emails through SendGrid.

    Without an API key the sender runs in dry-run mode: nothing leaves the
    process and the intended recipient and subject are logged instead.
    ``send`` never raises; failures are logged and reported through the
    returned ``DeliveryStatus``.
    """

    def __init__(self, settings, client=None):
        self.settings = settings
        self._client = client
        if self._client is None and settings.live:
            self._client = SendGridAPIClient(settings.api_key)

    @property
    def dry_run(self):
        return not self.settings.live

    def send(self, to, subject, html, text):
        if self.dry_run:
            logger.info(f'EMAIL (SendGrid not configured) to={to} subject={subject}')
            return DeliveryStatus.DRY_RUN

        try:
            message = Mail(
                from_email=self.settings.from_email,
                to_emails=to,
                subject=subject,
                html_content=html,
                plain_text_content=text,
            )
            response = self._client.send(message)
        except Exception as e:
            logger.error(f'Error sending email to {to}: {e}')
            return DeliveryStatus.FAILED

        status_code = getattr(response, 'status_code', None)
        if isinstance(status_code, int) and status_code >= 400:
            logger.error(f'Error sending email to {to}: SendGrid responded {status_code}')
            return DeliveryStatus.FAILED

        logger.info(f'Email sent to {to}: {subject}')
        return DeliveryStatus.SENT
