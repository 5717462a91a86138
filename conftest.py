import json as jsonlib

import pytest
import requests

from portal.core.config import Settings
from portal.core.http_client import ApiClient
from portal.core.session import PortalSession

BACKEND = "http://backend.test"


def make_response(status, body, url):
    resp = requests.Response()
    resp.status_code = status
    resp.url = url
    resp.reason = "OK" if status < 400 else "Error"
    resp.encoding = "utf-8"
    resp._content = b"" if body is None else jsonlib.dumps(body).encode("utf-8")
    return resp


class FakeHttp:
    """Stands in for requests.Session: canned answers keyed by (method, path)."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)

    def fail(self, method, path, exc):
        self.routes[(method, path)] = exc

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(BACKEND):]
        self.calls.append(
            {"method": method, "path": path, "params": params, "json": json, "headers": headers, "timeout": timeout}
        )
        answer = self.routes.get((method, path), (404, {"message": "Not found"}))
        if isinstance(answer, Exception):
            raise answer
        status, body = answer
        return make_response(status, body, url)


@pytest.fixture
def settings():
    return Settings(API_URL=BACKEND, REQUEST_TIMEOUT=2.5, BATCH_WORKERS=3)


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def client(settings, fake_http):
    return ApiClient(session=PortalSession(access_token="teacher-token"), settings=settings, http=fake_http)
