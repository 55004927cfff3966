"""
Form Handler - Client side of the contact pipeline

Holds the form fields and an explicit status (idle -> pending -> resolved).
While a submission is pending the form refuses another one, which is what
the disabled submit button does in the browser. Nothing is retried: the
visitor is the retry mechanism.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Optional

import requests

from utils.validation import validate_form

logger = logging.getLogger(__name__)

SENDING_MESSAGE = 'Sending your message...'
SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."
FAILURE_MESSAGE = 'Failed to send message. Please try again later or contact me directly.'


class FormStatus(enum.Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    RESOLVED = 'resolved'


class SubmissionInProgressError(RuntimeError):
    """A submission is already in flight"""


@dataclass
class ContactForm:
    name: str = ''
    email: str = ''
    message: str = ''

    def clear(self):
        self.name = ''
        self.email = ''
        self.message = ''

    def to_payload(self):
        return {'name': self.name, 'email': self.email, 'message': self.message}


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    message: str


class ContactFormHandler:
    """
    Submit the contact form to the relay endpoint

    Args:
        base_url (str): Origin of the API server, e.g. 'http://localhost:5000'
        endpoint (str): Path of the contact endpoint
        session: requests-compatible session (optional)
        timeout: Passed through to requests; None leaves it to the transport
    """

    def __init__(self, base_url, endpoint='/api/contact', session=None, timeout=None):
        self.url = base_url.rstrip('/') + endpoint
        self.session = session or requests.Session()
        self.timeout = timeout
        self.form = ContactForm()
        self.status = FormStatus.IDLE
        self.is_error = False
        self.status_message = ''
        self._lock = threading.Lock()

    @property
    def can_submit(self):
        return self.status is not FormStatus.PENDING

    def update(self, **fields):
        for key, value in fields.items():
            if not hasattr(self.form, key):
                raise AttributeError(f"Unknown form field: {key}")
            setattr(self.form, key, value)

    def submit(self, data: Optional[ContactForm] = None) -> SubmitResult:
        """
        Validate locally, then POST the form once.

        Returns:
            SubmitResult: ok with the success message, or not ok with the error

        Raises:
            SubmissionInProgressError: If called while a submission is pending
        """
        with self._lock:
            if self.status is FormStatus.PENDING:
                raise SubmissionInProgressError('A submission is already in progress')
            if data is not None:
                self.form = data

            validation_error = validate_form(self.form.name, self.form.email, self.form.message)
            if validation_error:
                return self._resolve(False, validation_error)

            self.status = FormStatus.PENDING
            self.is_error = False
            self.status_message = SENDING_MESSAGE
            payload = self.form.to_payload()

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            if not 200 <= response.status_code < 300:
                raise requests.HTTPError(f"{response.status_code} from {self.url}", response=response)
        except Exception as e:
            logger.error(f"Error sending contact form: {str(e)}")
            with self._lock:
                return self._resolve(False, FAILURE_MESSAGE)

        with self._lock:
            self.form.clear()
            return self._resolve(True, SUCCESS_MESSAGE)

    def _resolve(self, ok, message):
        self.status = FormStatus.RESOLVED
        self.is_error = not ok
        self.status_message = message
        return SubmitResult(ok=ok, message=message)
