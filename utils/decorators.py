"""
Decorators Module - Request body handling for JSON API routes
"""

from functools import wraps
from flask import request, current_app, abort
from .security import sanitize_payload


def sanitized_json(f):
    """Decode the JSON body (empty dict when absent or malformed), sanitize it,
    and pass it to the view as `payload`"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        # Enforce the size cap even when the body would not be parsed as JSON
        max_length = current_app.config.get('MAX_CONTENT_LENGTH')
        if max_length and (request.content_length or 0) > max_length:
            abort(413)

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        kwargs['payload'] = sanitize_payload(payload)
        return f(*args, **kwargs)
    return decorated_function
