import logging
import smtplib

import pytest
import requests

from config import ContactSettings
from models import ContactSubmission
from tests.conftest import FailingProvider, FakeProvider
from utils.helpers import render_contact_html
from utils.notifications import (
    ConsoleProvider,
    DeliveryError,
    MailjetProvider,
    SmtpProvider,
    build_contact_email,
    dispatch_contact,
    get_provider,
)

SUBMISSION = ContactSubmission(name='Jane Doe', email='jane@example.com', message='Hello\nthere')
SETTINGS = ContactSettings(
    from_email='noreply@example.com',
    from_name='Portfolio',
    to_email='owner@example.com',
    to_name='Owner'
)


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=''):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError('no json')
        return self._body


def mailjet_ok(message_id=1152921504606846976):
    return FakeResponse(200, {'Messages': [{'Status': 'success', 'To': [{'Email': 'owner@example.com', 'MessageID': message_id}]}]})


@pytest.fixture
def message():
    return build_contact_email(SUBMISSION, SETTINGS)


def test_build_contact_email(message):
    assert message.sender_email == 'noreply@example.com'
    assert message.sender_name == 'Portfolio'
    assert message.recipient_email == 'owner@example.com'
    assert message.recipient_name == 'Owner'
    assert message.reply_to == 'jane@example.com'
    assert message.subject == 'New Contact Form Submission'
    assert 'Name: Jane Doe' in message.text_body
    assert 'Email: jane@example.com' in message.text_body
    assert 'Hello\nthere' in message.text_body
    assert 'white-space: pre-wrap' in message.html_body


def test_html_footer_carries_the_year():
    assert '2031 Portfolio Contact Form' in render_contact_html(SUBMISSION, year=2031)


def test_mailjet_send_posts_v31_payload(monkeypatch, message):
    calls = []

    def fake_post(url, json=None, auth=None, timeout=None):
        calls.append({'url': url, 'json': json, 'auth': auth})
        return mailjet_ok()

    monkeypatch.setattr(requests, 'post', fake_post)
    provider = MailjetProvider('key', 'secret')

    assert provider.send(message) == '1152921504606846976'

    call = calls[0]
    assert call['url'] == 'https://api.mailjet.com/v3.1/send'
    assert call['auth'] == ('key', 'secret')
    entry = call['json']['Messages'][0]
    assert entry['From'] == {'Email': 'noreply@example.com', 'Name': 'Portfolio'}
    assert entry['To'] == [{'Email': 'owner@example.com', 'Name': 'Owner'}]
    assert entry['ReplyTo'] == {'Email': 'jane@example.com'}
    assert entry['Subject'] == 'New Contact Form Submission'
    assert entry['HTMLPart'] == message.html_body
    assert entry['TextPart'] == message.text_body


@pytest.mark.parametrize('response', [
    FakeResponse(401, text='Unauthorized'),
    FakeResponse(200, {'Messages': [{'Status': 'error', 'Errors': [{'ErrorMessage': 'bad'}]}]}),
    FakeResponse(200, {'unexpected': True}),
    FakeResponse(200, None),
])
def test_mailjet_bad_responses_raise_delivery_error(monkeypatch, message, response):
    monkeypatch.setattr(requests, 'post', lambda *a, **kw: response)

    with pytest.raises(DeliveryError):
        MailjetProvider('key', 'secret').send(message)


def test_mailjet_transport_error_raises_delivery_error(monkeypatch, message):
    def fake_post(*args, **kwargs):
        raise requests.ConnectionError('connection refused')

    monkeypatch.setattr(requests, 'post', fake_post)

    with pytest.raises(DeliveryError, match='connection refused'):
        MailjetProvider('key', 'secret').send(message)


def test_mailjet_without_credentials_never_calls_api(monkeypatch, message):
    def fake_post(*args, **kwargs):
        raise AssertionError('should not be called')

    monkeypatch.setattr(requests, 'post', fake_post)
    provider = MailjetProvider(None, None)

    assert provider.configured is False
    with pytest.raises(DeliveryError, match='not configured'):
        provider.send(message)


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        self.sent.append(msg)


def test_smtp_send_uses_starttls_and_returns_message_id(monkeypatch, message):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, 'SMTP', FakeSMTP)

    message_id = SmtpProvider('smtp.example.com', '2525', 'user', 'pw').send(message)

    server = FakeSMTP.instances[0]
    assert (server.host, server.port) == ('smtp.example.com', 2525)
    assert server.started_tls
    assert server.logged_in == ('user', 'pw')
    sent = server.sent[0]
    assert sent['Message-ID'] == message_id
    assert sent['Reply-To'] == 'jane@example.com'
    assert sent['To'] == 'Owner <owner@example.com>'
    assert [part.get_content_type() for part in sent.get_payload()] == ['text/plain', 'text/html']


def test_smtp_failure_raises_delivery_error(monkeypatch, message):
    class BrokenSMTP(FakeSMTP):
        def send_message(self, msg):
            raise smtplib.SMTPRecipientsRefused({'owner@example.com': (550, b'no')})

    monkeypatch.setattr(smtplib, 'SMTP', BrokenSMTP)

    with pytest.raises(DeliveryError):
        SmtpProvider('smtp.example.com').send(message)


def test_smtp_without_host_raises_delivery_error(message):
    with pytest.raises(DeliveryError):
        SmtpProvider(None).send(message)


def test_console_provider_logs_instead_of_sending(message, caplog):
    logger = logging.getLogger('test.console')
    with caplog.at_level(logging.INFO, logger='test.console'):
        message_id = ConsoleProvider(logger=logger).send(message)

    assert message_id
    assert message_id in caplog.text
    assert 'owner@example.com' in caplog.text


@pytest.mark.parametrize('name, expected', [
    ('mailjet', MailjetProvider),
    ('SMTP', SmtpProvider),
    ('console', ConsoleProvider),
    (None, MailjetProvider),
])
def test_get_provider_selects_by_name(name, expected):
    assert isinstance(get_provider({'MAIL_PROVIDER': name}), expected)


def test_get_provider_rejects_unknown_name():
    with pytest.raises(ValueError):
        get_provider({'MAIL_PROVIDER': 'pigeon'})


def test_dispatch_contact_returns_message_id(app):
    provider = FakeProvider()
    with app.app_context():
        result = dispatch_contact(SUBMISSION, SETTINGS, provider)

    assert result.ok
    assert result.message_id == 'msg-1'
    assert provider.messages[0].recipient_email == 'owner@example.com'


def test_dispatch_contact_turns_failures_into_results(app):
    provider = FailingProvider(DeliveryError('quota exceeded'))
    with app.app_context():
        result = dispatch_contact(SUBMISSION, SETTINGS, provider)

    assert not result.ok
    assert result.error == 'quota exceeded'
    assert provider.calls == 1
