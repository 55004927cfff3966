"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from app.py to avoid circular imports
and enable better testing.
"""

from flask import current_app
from flask_cors import CORS

# Initialize extensions without binding to app
cors = CORS()


def get_contact_settings():
    """Immutable ContactSettings built by create_app"""
    return current_app.extensions['contact_settings']


def get_mail_provider():
    """Email provider selected at startup"""
    return current_app.extensions['mail_provider']


__all__ = ['cors', 'get_contact_settings', 'get_mail_provider']
