"""
Portfolio Contact Relay - Main Application Entry Point
Application Factory Pattern

This module initializes the Flask application with its configuration,
boundary protections (CORS, rate limiting, body cap, security headers)
and JSON error handling. Route handling is delegated to blueprints.
"""

import os
import time
from flask import Flask, g, request
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config, ContactSettings
from extensions import cors
from utils.helpers import error_response
from utils.notifications import get_provider
from utils.security import FixedWindowRateLimiter

# Import all blueprints
from blueprints.api import api_bp
from blueprints.pages import pages_bp


def create_app(config_name=None, test_config=None, mail_provider=None, rate_limit_clock=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional, defaults to FLASK_ENV)
        test_config (dict): Extra config values applied on top (optional)
        mail_provider: Email provider instance overriding MAIL_PROVIDER (optional)
        rate_limit_clock (callable): Time source for the rate limiter (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Only trust X-Forwarded-For for the configured number of proxy hops
    proxy_hops = app.config.get('PROXY_FIX_X_FOR', 0)
    if proxy_hops:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_hops)

    # Initialize extensions with app
    initialize_extensions(app, mail_provider, rate_limit_clock)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    return app


def initialize_extensions(app, mail_provider=None, rate_limit_clock=None):
    """Initialize extensions and the read-only contact pipeline state"""
    cors.init_app(
        app,
        resources={r'/api/*': {'origins': app.config['ALLOWED_ORIGINS']}},
        supports_credentials=True,
        methods=app.config['CORS_METHODS'],
        allow_headers=app.config['CORS_HEADERS']
    )

    limiter = FixedWindowRateLimiter(clock=rate_limit_clock) if rate_limit_clock else FixedWindowRateLimiter()
    limiter.init_app(app)

    app.extensions['contact_settings'] = ContactSettings.from_config(app.config)
    provider = mail_provider or get_provider(app.config)
    app.extensions['mail_provider'] = provider

    app.logger.info(f"✓ Mail provider: {getattr(provider, 'name', type(provider).__name__)}")
    app.logger.info(f"✓ Allowed origins: {', '.join(app.config['ALLOWED_ORIGINS'])}")
    if not getattr(provider, 'configured', True):
        app.logger.warning('✗ Mail provider credentials missing; contact emails will fail')
    if not app.extensions['contact_settings'].to_email:
        app.logger.warning('✗ MAIL_TO_EMAIL is not set; contact emails have no recipient')


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)
    app.register_blueprint(pages_bp)


def register_error_handlers(app):
    """Every error leaves the app as a JSON body"""

    @app.errorhandler(413)
    def request_too_large(e):
        return error_response('Request body too large', 413)

    @app.errorhandler(404)
    def not_found(e):
        return error_response('Not found', 404)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}", exc_info=True)
        return error_response('Something went wrong on the server', 500)


def register_hooks(app):
    """Register request/response hooks"""

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = "default-src 'self'; frame-ancestors 'self'"
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['X-DNS-Prefetch-Control'] = 'off'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    @app.after_request
    def log_request(response):
        started = g.get('request_started')
        elapsed = (time.perf_counter() - started) * 1000 if started else 0.0
        app.logger.info(f"{request.method} {request.path} {response.status_code} {elapsed:.1f} ms")
        return response


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=app.config.get('DEBUG', False)
    )
