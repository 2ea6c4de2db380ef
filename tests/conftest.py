import json

import pytest
import requests

MOCK_URI = "http://mock.local"


def make_response(status, body, url=MOCK_URI):
    r = requests.Response()
    r.status_code = status
    r.url = url
    r.encoding = "utf-8"
    if isinstance(body, (bytes, str)):
        r._content = body.encode() if isinstance(body, str) else body
    else:
        r._content = json.dumps(body).encode()
        r.headers["Content-Type"] = "application/json"
    return r


class MockServer:
    """Stands in for `requests.Session`, answering like a stub HTTP server.

    Routes are matched on method, path and required headers; anything that
    does not match gets a 404, the same as an unmatched stub.
    """

    def __init__(self, uri=MOCK_URI):
        self.uri = uri
        self.routes = []
        self.calls = []
        self.closed = False
        self.raise_exc = None

    def mount(self, path, body, status=200, headers=None):
        self.routes.append((path, headers or {}, status, body))

    def post(self, url, json=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "json": json, "headers": dict(headers or {}), "timeout": timeout})
        if self.raise_exc is not None:
            raise self.raise_exc
        sent = {k.lower(): v for k, v in (headers or {}).items()}
        for path, required, status, body in self.routes:
            if url != f"{self.uri}{path}":
                continue
            if all(sent.get(k.lower()) == v for k, v in required.items()):
                return make_response(status, body, url)
        return make_response(404, "", url)

    def close(self):
        self.closed = True


@pytest.fixture
def server():
    return MockServer()
