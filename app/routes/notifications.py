from flask import Blueprint, request, jsonify
from app.decorators import dispatch_secret_required
from app.events import get_mailer, handle_notification_created

bp = Blueprint('notifications', __name__, url_prefix='/notifications')


@bp.route('/created', methods=['POST'])
@dispatch_secret_required
def notification_created():
    """Push endpoint for hosts that deliver notification documents over HTTP.

    The body is the notification document itself, optionally with its ``id``.
    Processing failures are absorbed, so any well-formed body gets a 200.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'expected a JSON object'}), 400

    data = dict(data)
    notification_id = data.pop('id', None)
    result = handle_notification_created(data, get_mailer(), notification_id=notification_id)
    return jsonify(result.to_dict())
