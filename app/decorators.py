import hmac
from functools import wraps
from flask import request, current_app, jsonify


def _bearer_token():
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    return header.removeprefix('Bearer ').strip()


def dispatch_secret_required(f):
    """Require ``Authorization: Bearer <DISPATCH_SECRET>``.

    Without a configured secret the route is closed: every request gets 503.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        secret = current_app.config.get('DISPATCH_SECRET')
        if not secret:
            current_app.logger.warning('DISPATCH_SECRET not set; refusing %s', request.path)
            return jsonify({'error': 'endpoint disabled'}), 503
        token = _bearer_token()
        if token is None or not hmac.compare_digest(token, secret):
            return jsonify({'error': 'unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated
