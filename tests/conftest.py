from __future__ import annotations

import email.message
import io
import urllib.request
from dataclasses import dataclass

import pytest

from geolookup.geocoding_base import BaseLookup, BaseResult


@dataclass(frozen=True)
class EchoResult(BaseResult):
    @property
    def address(self) -> str:
        return self.raw.get('name', '')


class EchoLookup(BaseLookup):
    """Lookup against a fake host; remembers what it was asked to build."""
    provider_id = 'echo'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def build_query_url(self, query, reverse_or_options=False):
        self.calls.append((query, reverse_or_options))
        reverse, _ = self.extract_reverse_and_options(reverse_or_options)
        method = 'reverse' if reverse else 'search'
        return f"http://geo.example.com/{method}?{self.hash_to_query({'q': query})}"

    def result_type(self):
        return EchoResult


class FakeResponse:
    def __init__(self, body, charset='utf-8'):
        raw = body.encode(charset or 'utf-8') if isinstance(body, str) else body
        self._body = io.BytesIO(raw)
        self.headers = email.message.Message()
        ctype = 'application/json'
        if charset:
            ctype += f'; charset={charset}'
        self.headers['Content-Type'] = ctype
        self.closed = False

    def read(self, amt=-1):
        return self._body.read(amt)

    def read1(self, amt=-1):
        return self._body.read1(amt)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeNetwork:
    """Stands in for urllib's opener; queue responses or exceptions."""

    def __init__(self):
        self.requests = []
        self.handlers = []
        self.queued = []
        self.default = None

    def queue(self, *items):
        self.queued.extend(items)

    def build_opener(self, *handlers):
        self.handlers.append(handlers)
        return self

    def open(self, req, timeout=None):
        self.requests.append((req, timeout))
        item = self.queued.pop(0) if self.queued else self.default
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, str):
            return FakeResponse(item)
        return item


@pytest.fixture
def network(monkeypatch):
    net = FakeNetwork()
    monkeypatch.setattr(urllib.request, 'build_opener', net.build_opener)
    return net


@pytest.fixture
def echo_lookup():
    return EchoLookup()
