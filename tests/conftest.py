import json

import kr8s
import pytest
import requests
from injector import Injector

from src.confluent.client import ConfluentClient, Credentials


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)


class FakeTransport:
    """Stands in for requests.request, replays queued responses and records every call."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def reply(self, status_code=200, payload=None, text=None):
        self.responses.append(FakeResponse(status_code, payload, text))

    def fail(self, exc):
        self.responses.append(exc)

    def __call__(self, method, url, **kwargs):
        self.calls.append(dict(method=method, url=url, **kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected request {method} {url}")
        rsp = self.responses.pop(0)
        if isinstance(rsp, Exception):
            raise rsp
        return rsp


class FakeCustomResource:
    def __init__(self):
        self.patches = []

    def patch(self, body):
        self.patches.append(body)


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(requests, "request", fake)
    return fake


@pytest.fixture
def client():
    return ConfluentClient(Credentials(key="ccloud-key", secret="ccloud-secret"))


@pytest.fixture
def injector(client):
    return Injector([lambda binder: binder.bind(ConfluentClient, to=client)])


@pytest.fixture
def custom_resource(monkeypatch):
    cr = FakeCustomResource()
    cr.lookups = []

    def fake_get(resource, name, namespace=None):
        cr.lookups.append((resource, name, namespace))
        return [cr]

    monkeypatch.setattr(kr8s, "get", fake_get)
    return cr
