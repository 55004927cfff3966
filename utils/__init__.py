"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import sanitized_json
from .validation import (
    ValidationError,
    is_valid_email,
    validate_submission,
    validate_form
)
from .security import (
    get_client_ip,
    FixedWindowRateLimiter,
    sanitize_payload
)
from .helpers import (
    render_contact_html,
    render_contact_text,
    error_response
)
from .notifications import (
    DeliveryError,
    MailjetProvider,
    SmtpProvider,
    ConsoleProvider,
    get_provider,
    build_contact_email,
    dispatch_contact
)

__all__ = [
    # Decorators
    'sanitized_json',

    # Validation
    'ValidationError',
    'is_valid_email',
    'validate_submission',
    'validate_form',

    # Security
    'get_client_ip',
    'FixedWindowRateLimiter',
    'sanitize_payload',

    # Helpers
    'render_contact_html',
    'render_contact_text',
    'error_response',

    # Notifications
    'DeliveryError',
    'MailjetProvider',
    'SmtpProvider',
    'ConsoleProvider',
    'get_provider',
    'build_contact_email',
    'dispatch_contact'
]
