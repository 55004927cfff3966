import pytest

from app import create_app


class FakeProvider:
    """Records messages and hands out sequential ids"""

    name = 'fake'
    configured = True

    def __init__(self):
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        return f"msg-{len(self.messages)}"


class FailingProvider:
    name = 'failing'
    configured = True

    def __init__(self, exc=None):
        self.exc = exc or RuntimeError('provider exploded')
        self.calls = 0

    def send(self, message):
        self.calls += 1
        raise self.exc


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


VALID_PAYLOAD = {
    'name': 'Jane Doe',
    'email': 'jane@example.com',
    'message': 'Hello'
}


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(provider, clock):
    return create_app('testing', mail_provider=provider, rate_limit_clock=clock)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_app(clock):
    """Factory for apps with custom config or provider"""
    def _make(config_name='testing', provider=None, **overrides):
        return create_app(
            config_name,
            test_config=overrides or None,
            mail_provider=provider or FakeProvider(),
            rate_limit_clock=clock
        )
    return _make
