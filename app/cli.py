import click
from flask.cli import with_appcontext

from app import firestore_dao as dao
from app.events import get_mailer, handle_notification_created


@click.command('replay-notification')
@click.argument('notification_id')
@with_appcontext
def replay_notification(notification_id):
    """Run the email pipeline again for a stored notification.

    There is no de-duplication: replaying a delivered notification sends the
    email a second time.
    """
    data = dao.get_notification_data(notification_id)
    if data is None:
        raise click.ClickException(f'Notification not found: {notification_id}')

    result = handle_notification_created(data, get_mailer(), notification_id=notification_id)
    summary = result.to_dict()
    click.echo(f"{summary['outcome']}: delivery={summary['delivery']} skipped={summary['skipped']}")
    if not result.ok:
        raise click.ClickException(summary['error'] or 'processing failed')
