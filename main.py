import os
from firebase_functions import firestore_fn
from app import create_app
from app.events import get_mailer, handle_document_created_event

app = create_app()


@firestore_fn.on_document_created(document='notifications/{notificationId}')
def on_notification_created(event):
    with app.app_context():
        handle_document_created_event(event, get_mailer())


if __name__ == '__main__':
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() in ('true', '1')
    port = int(os.environ.get('PORT', 8080))
    app.run(host='0.0.0.0', port=port, debug=debug)
