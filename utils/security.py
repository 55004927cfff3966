"""
Security Module - Request boundary protections: client IP, rate limiting, payload sanitization
"""

import math
import re
import time
import threading
from flask import request, jsonify, current_app


RATE_LIMIT_ERROR = 'Too many requests, please try again later.'

_SCRIPT_BLOCK_RE = re.compile(r'<(script|style)\b.*?>.*?</\1\s*>', flags=re.I | re.S)


def get_client_ip():
    """Socket address of the client; ProxyFix rewrites it when proxies are trusted"""
    return request.remote_addr or 'unknown'


class FixedWindowRateLimiter:
    """
    Fixed-window request counter keyed by client IP.

    The first hit from a key opens a window of `window` seconds; at most
    `max_requests` hits are allowed until the window expires. One budget is
    shared by every route the limiter guards.
    """

    def __init__(self, max_requests=1000, window=15 * 60, clock=time.time):
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self.prefix = '/api/'
        self._windows = {}  # {key: [window_start, count]}
        self._lock = threading.Lock()

    def init_app(self, app, prefix='/api/'):
        self.max_requests = app.config.get('RATE_LIMIT_MAX_REQUESTS', self.max_requests)
        self.window = app.config.get('RATE_LIMIT_WINDOW', self.window)
        self.prefix = prefix
        app.extensions['rate_limiter'] = self
        app.before_request(self._check_request)
        app.after_request(self._add_headers)

    def hit(self, key):
        """
        Count one request for key.

        Returns:
            tuple: (allowed, remaining, reset_in_seconds)
        """
        now = self.clock()
        with self._lock:
            self._prune(now)
            entry = self._windows.get(key)
            if entry is None or now - entry[0] >= self.window:
                entry = [now, 0]
                self._windows[key] = entry

            reset_in = max(0, math.ceil(entry[0] + self.window - now))
            if entry[1] >= self.max_requests:
                return False, 0, reset_in

            entry[1] += 1
            return True, self.max_requests - entry[1], reset_in

    def reset(self):
        with self._lock:
            self._windows.clear()

    def _prune(self, now):
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window]
        for k in expired:
            del self._windows[k]

    def _guarded(self):
        return request.path.startswith(self.prefix) and request.method != 'OPTIONS'

    def _check_request(self):
        if not self._guarded():
            return None

        client_ip = get_client_ip()
        allowed, remaining, reset_in = self.hit(client_ip)
        request.environ['ratelimit.remaining'] = remaining
        if allowed:
            return None

        current_app.logger.warning(f"Rate limit exceeded for {client_ip} on {request.path}")
        response = jsonify({'error': RATE_LIMIT_ERROR})
        response.status_code = 429
        response.headers['Retry-After'] = str(reset_in)
        return response

    def _add_headers(self, response):
        remaining = request.environ.get('ratelimit.remaining')
        if remaining is not None:
            response.headers['X-RateLimit-Limit'] = str(self.max_requests)
            response.headers['X-RateLimit-Remaining'] = str(remaining)
        return response


def sanitize_value(value):
    """Strip script/style blocks and NUL bytes from a string"""
    value = value.replace('\x00', '')
    return _SCRIPT_BLOCK_RE.sub('', value)


def sanitize_payload(payload):
    """
    Recursively clean a decoded JSON body.

    Keys starting with '$' or containing '.' are dropped so they can never
    reach a query layer as operators; strings go through sanitize_value.
    """
    if isinstance(payload, dict):
        return {
            key: sanitize_payload(value)
            for key, value in payload.items()
            if not (isinstance(key, str) and (key.startswith('$') or '.' in key))
        }
    if isinstance(payload, list):
        return [sanitize_payload(item) for item in payload]
    if isinstance(payload, str):
        return sanitize_value(payload)
    return payload


__all__ = [
    'RATE_LIMIT_ERROR',
    'get_client_ip',
    'FixedWindowRateLimiter',
    'sanitize_value',
    'sanitize_payload'
]
