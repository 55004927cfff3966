"""
Validation Module - Contact form rules shared by the endpoint and the form client

Both sides run their own checks against the same email pattern; the server
never relies on the client having validated.
"""

import re
from models import ContactSubmission

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')

REQUIRED_FIELDS_ERROR = 'Name, email, and message are required'
INVALID_EMAIL_ERROR = 'Please enter a valid email address'


class ValidationError(Exception):
    """Raised when a submission is rejected before dispatch"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


def is_valid_email(email):
    """Loose local@domain.tld shape check, not RFC 5322"""
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


def _clean(value):
    return value.strip() if isinstance(value, str) else ''


def validate_submission(payload):
    """
    Server-side validation of a decoded JSON body.

    Args:
        payload: Decoded request body (anything other than a dict counts as empty)

    Returns:
        ContactSubmission: Trimmed, validated submission

    Raises:
        ValidationError: With the client-facing 400 message
    """
    if not isinstance(payload, dict):
        payload = {}

    name = _clean(payload.get('name'))
    email = _clean(payload.get('email'))
    message = _clean(payload.get('message'))

    if not all([name, email, message]):
        raise ValidationError(REQUIRED_FIELDS_ERROR)

    if not is_valid_email(email):
        raise ValidationError(INVALID_EMAIL_ERROR)

    return ContactSubmission(name=name, email=email, message=message)


def validate_form(name, email, message):
    """Client-side checks in form order; returns the first error or None"""
    if not _clean(name):
        return 'Name is required'
    if not _clean(email):
        return 'Email is required'
    if not is_valid_email(email):
        return 'Please enter a valid email'
    if not _clean(message):
        return 'Message is required'
    return None


__all__ = [
    'EMAIL_PATTERN',
    'REQUIRED_FIELDS_ERROR',
    'INVALID_EMAIL_ERROR',
    'ValidationError',
    'is_valid_email',
    'validate_submission',
    'validate_form'
]
