"""
Notifications Module - Transactional email delivery for contact submissions

Every provider exposes send(EmailMessage) -> message id and raises
DeliveryError on failure. dispatch_contact wraps a send in a DeliveryResult
so callers never have to catch provider errors themselves.
"""

import smtplib
import uuid
import requests
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, make_msgid
from flask import current_app
from models import EmailMessage, DeliveryResult
from .helpers import CONTACT_SUBJECT, render_contact_html, render_contact_text


class DeliveryError(Exception):
    """Raised when the email provider rejects or fails to accept a message"""


class MailjetProvider:
    """Mailjet Send API v3.1"""

    name = 'mailjet'

    def __init__(self, api_key, secret_key, api_url='https://api.mailjet.com/v3.1/send', timeout=10):
        self.api_key = api_key
        self.secret_key = secret_key
        self.api_url = api_url
        self.timeout = timeout

    @property
    def configured(self):
        return bool(self.api_key and self.secret_key)

    def build_payload(self, message):
        entry = {
            'From': {'Email': message.sender_email, 'Name': message.sender_name},
            'To': [{'Email': message.recipient_email, 'Name': message.recipient_name}],
            'Subject': message.subject,
            'HTMLPart': message.html_body,
            'TextPart': message.text_body,
        }
        if message.reply_to:
            entry['ReplyTo'] = {'Email': message.reply_to}
        return {'Messages': [entry]}

    def send(self, message):
        if not self.configured:
            raise DeliveryError('Mailjet credentials are not configured')

        try:
            response = requests.post(
                self.api_url,
                json=self.build_payload(message),
                auth=(self.api_key, self.secret_key),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise DeliveryError(f'Mailjet request failed: {str(e)}') from e

        if response.status_code != 200:
            raise DeliveryError(f'Mailjet API error: {response.status_code} {response.text[:200]}')

        try:
            result = response.json()['Messages'][0]
            if result.get('Status') != 'success':
                raise DeliveryError(f"Mailjet rejected message: {result.get('Errors')}")
            return str(result['To'][0]['MessageID'])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise DeliveryError(f'Unexpected Mailjet response: {str(e)}') from e


class SmtpProvider:
    """Plain SMTP with STARTTLS"""

    name = 'smtp'

    def __init__(self, host, port=587, username=None, password=None, timeout=10):
        self.host = host
        self.port = int(port or 587)
        self.username = username
        self.password = password
        self.timeout = timeout

    @property
    def configured(self):
        return bool(self.host)

    def build_mime(self, message):
        msg = MIMEMultipart('alternative')
        msg['Subject'] = message.subject
        msg['From'] = formataddr((message.sender_name, message.sender_email))
        msg['To'] = formataddr((message.recipient_name, message.recipient_email))
        if message.reply_to:
            msg['Reply-To'] = message.reply_to
        msg['Message-ID'] = make_msgid()

        msg.attach(MIMEText(message.text_body, 'plain'))
        msg.attach(MIMEText(message.html_body, 'html'))
        return msg

    def send(self, message):
        if not self.configured:
            raise DeliveryError('SMTP host is not configured')

        msg = self.build_mime(message)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryError(f'SMTP send failed: {str(e)}') from e

        return msg['Message-ID']


class ConsoleProvider:
    """Development provider: logs the message instead of sending it"""

    name = 'console'
    configured = True

    def __init__(self, logger=None):
        self.logger = logger

    def send(self, message):
        message_id = uuid.uuid4().hex
        logger = self.logger or current_app.logger
        logger.info(
            f"[console mail] {message_id} to={message.recipient_email} "
            f"reply_to={message.reply_to} subject={message.subject!r}\n{message.text_body}")
        return message_id


def get_provider(config):
    """Build the email provider selected by MAIL_PROVIDER"""
    provider_name = (config.get('MAIL_PROVIDER') or 'mailjet').lower()

    if provider_name == 'mailjet':
        return MailjetProvider(
            api_key=config.get('MAILJET_API_KEY'),
            secret_key=config.get('MAILJET_SECRET_KEY'),
            api_url=config.get('MAILJET_API_URL') or 'https://api.mailjet.com/v3.1/send'
        )
    if provider_name == 'smtp':
        return SmtpProvider(
            host=config.get('SMTP_HOST'),
            port=config.get('SMTP_PORT'),
            username=config.get('SMTP_USERNAME'),
            password=config.get('SMTP_PASSWORD')
        )
    if provider_name == 'console':
        return ConsoleProvider()

    raise ValueError(f"Unknown MAIL_PROVIDER: {provider_name}")


def build_contact_email(submission, settings):
    """
    Build the operator notification for a validated submission

    Args:
        submission (ContactSubmission): Validated visitor input
        settings (ContactSettings): Sender/recipient configuration

    Returns:
        EmailMessage: Ready to hand to a provider
    """
    return EmailMessage(
        sender_email=settings.from_email,
        sender_name=settings.from_name,
        recipient_email=settings.to_email,
        recipient_name=settings.to_name,
        subject=CONTACT_SUBJECT,
        html_body=render_contact_html(submission),
        text_body=render_contact_text(submission),
        reply_to=submission.email
    )


def dispatch_contact(submission, settings, provider):
    """
    Send one contact submission. No retries: a failure is returned, not raised.

    Returns:
        DeliveryResult: message id on success, error detail on failure
    """
    try:
        message = build_contact_email(submission, settings)
        message_id = provider.send(message)
        current_app.logger.info(
            f"Contact email sent via {getattr(provider, 'name', 'provider')}, message_id: {message_id}")
        return DeliveryResult.sent(message_id)
    except Exception as e:
        current_app.logger.error(f"Error sending contact email: {str(e)}", exc_info=True)
        return DeliveryResult.failed(e)


__all__ = [
    'DeliveryError',
    'MailjetProvider',
    'SmtpProvider',
    'ConsoleProvider',
    'get_provider',
    'build_contact_email',
    'dispatch_contact'
]
