"""
Client Package - Contact form handler used by the portfolio front-end
"""

from .form_handler import (
    FormStatus,
    ContactForm,
    ContactFormHandler,
    SubmissionInProgressError
)

__all__ = [
    'FormStatus',
    'ContactForm',
    'ContactFormHandler',
    'SubmissionInProgressError'
]
