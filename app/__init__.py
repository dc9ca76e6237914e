import logging
from flask import Flask
from config import Config


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize Firebase
    if app.config.get('FIREBASE_INIT', True):
        from app.firebase_init import init_firebase
        init_firebase(app.config)

    # Delivery settings are fixed for the lifetime of the process
    from app.services.mailer import EmailSender, MailSettings
    settings = MailSettings.from_config(app.config)
    app.extensions['mailer'] = EmailSender(settings)
    if settings.live:
        app.logger.info('SendGrid delivery enabled, sending from %s', settings.from_email)
    else:
        app.logger.info('SENDGRID_API_KEY not set; emails will be logged, not sent')

    # Register blueprints
    from app.routes import notifications
    app.register_blueprint(notifications.bp)

    from app.cli import replay_notification
    app.cli.add_command(replay_notification)

    return app
