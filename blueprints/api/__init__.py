"""
API Blueprint - JSON endpoints consumed by the portfolio front-end
Handles: Contact form submission
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import routes
