"""
API Routes - Contact form submission endpoint

received -> validating -> rejected (400)
                       -> dispatching -> sent (200) | failed (500)
"""

from flask import jsonify, current_app
from extensions import get_contact_settings, get_mail_provider
from utils.decorators import sanitized_json
from utils.helpers import error_response
from utils.notifications import dispatch_contact
from utils.security import get_client_ip
from utils.validation import ValidationError, validate_submission
from . import api_bp

DELIVERY_FAILED_ERROR = 'Failed to send email. Please try again later.'


@api_bp.route('/contact', methods=['POST'])
@sanitized_json
def contact(payload):
    """Validate a contact submission and forward it to the site owner by email"""
    try:
        submission = validate_submission(payload)
    except ValidationError as e:
        current_app.logger.info(f"Contact submission rejected from {get_client_ip()}: {e.message}")
        return error_response(e.message, 400)

    settings = get_contact_settings()
    result = dispatch_contact(submission, settings, get_mail_provider())

    if not result.ok:
        details = result.error if settings.development else None
        return error_response(DELIVERY_FAILED_ERROR, 500, details=details)

    return jsonify({
        'success': True,
        'message': 'Email sent successfully',
        'messageId': result.message_id
    }), 200
