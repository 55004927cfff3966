"""
Pages Routes - Service status routes
"""

from flask import current_app, jsonify
from extensions import get_mail_provider
from . import pages_bp


@pages_bp.route('/')
def index():
    return jsonify({'message': 'Email API server is running'})


@pages_bp.route('/health')
def health_check():
    """Liveness plus a hint whether mail delivery can work at all"""
    provider = get_mail_provider()
    return jsonify({
        'status': 'ok',
        'message': 'Contact relay is running',
        'mail_provider': getattr(provider, 'name', type(provider).__name__),
        'mail_configured': bool(getattr(provider, 'configured', True)),
        'environment': current_app.config.get('ENV_NAME')
    }), 200
