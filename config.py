import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _split_origins(value):
    return [o.strip() for o in value.split(',') if o.strip()]


class Config:
    """Base configuration"""

    ENV_NAME = 'default'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Request Settings
    MAX_CONTENT_LENGTH = 10 * 1024  # 10KB

    # Number of trusted proxies in front of the app; 0 keys clients on the socket address
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))

    # CORS Settings
    ALLOWED_ORIGINS = _split_origins(os.environ.get(
        'ALLOWED_ORIGINS',
        os.environ.get('CLIENT_URL', 'https://vicportfolio.onrender.com') + ',http://localhost:5173'))
    CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    CORS_HEADERS = ['Content-Type', 'Authorization']

    # Rate Limit Settings (fixed window, shared by all /api/* routes)
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '1000'))
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', str(15 * 60)))  # seconds

    # Mail Settings
    MAIL_PROVIDER = os.environ.get('MAIL_PROVIDER', 'mailjet')
    MAIL_FROM_EMAIL = os.environ.get('MAIL_FROM_EMAIL')
    MAIL_FROM_NAME = os.environ.get('MAIL_FROM_NAME', 'Portfolio Contact Form')
    MAIL_TO_EMAIL = os.environ.get('MAIL_TO_EMAIL')
    MAIL_TO_NAME = os.environ.get('MAIL_TO_NAME', '')

    # Mailjet Settings
    MAILJET_API_KEY = os.environ.get('MAILJET_API_KEY')
    MAILJET_SECRET_KEY = os.environ.get('MAILJET_SECRET_KEY')
    MAILJET_API_URL = os.environ.get('MAILJET_API_URL', 'https://api.mailjet.com/v3.1/send')

    # SMTP Settings
    SMTP_HOST = os.environ.get('SMTP_HOST')
    SMTP_PORT = os.environ.get('SMTP_PORT', '587')
    SMTP_USERNAME = os.environ.get('SMTP_USERNAME')
    SMTP_PASSWORD = os.environ.get('SMTP_PASSWORD')


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    DEBUG = False
    TESTING = True
    MAIL_PROVIDER = 'console'
    MAIL_FROM_EMAIL = 'noreply@example.com'
    MAIL_TO_EMAIL = 'owner@example.com'
    ALLOWED_ORIGINS = ['http://localhost:5173']


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': ProductionConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'production')
    return config.get(env, config['default'])


@dataclass(frozen=True)
class ContactSettings:
    """Read-only contact pipeline settings, built once at startup."""

    from_email: str
    from_name: str
    to_email: str
    to_name: str
    development: bool = False

    @classmethod
    def from_config(cls, app_config):
        return cls(
            from_email=app_config.get('MAIL_FROM_EMAIL') or '',
            from_name=app_config.get('MAIL_FROM_NAME') or '',
            to_email=app_config.get('MAIL_TO_EMAIL') or '',
            to_name=app_config.get('MAIL_TO_NAME') or '',
            development=app_config.get('ENV_NAME') == 'development',
        )
