import json

import pytest
from requests.structures import CaseInsensitiveDict

from bssidlister.errors import AuthenticationError

SAMPLE_INVENTORY = [
    {
        "serialNumber": "AP1",
        "canEdit": True,
        "canDelete": True,
        "proxied": "Local",
        "radios": [
            {"radioIndex": 0, "wlan": [{"bssid": "AA:BB:CC:00:11:22", "ssid": "Corp"}]},
        ],
    },
]


class FakeResponse:
    def __init__(self, status_code=200, content_type="application/json", body=b"", read_error=None):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict()
        if content_type is not None:
            self.headers["Content-Type"] = content_type
        self._body = body
        self._read_error = read_error
        self.reads = 0
        self.close_calls = 0

    @property
    def content(self):
        self.reads += 1
        if self._read_error is not None:
            raise self._read_error
        return self._body

    def close(self):
        self.close_calls += 1

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeClient:
    # Stands in for XCAClient: records what was asked, hands back a canned response.

    base_url = "https://xca.test:5825/management/"

    def __init__(self, response=None, auth_error=None, build_error=None, perform_error=None):
        self.response = response
        self.auth_error = auth_error
        self.build_error = build_error
        self.perform_error = perform_error
        self.requests = []
        self.auth_calls = 0

    def authenticate(self):
        self.auth_calls += 1
        if self.auth_error is not None:
            raise self.auth_error
        return "token"

    def build_request(self, path, params=None):
        if self.build_error is not None:
            raise self.build_error
        req = ("GET", path, params)
        self.requests.append(req)
        return req

    def perform(self, request):
        if self.perform_error is not None:
            raise self.perform_error
        return self.response


def json_response(payload, **kwargs):
    return FakeResponse(body=json.dumps(payload).encode("utf-8"), **kwargs)


@pytest.fixture
def sample_client():
    return FakeClient(response=json_response(SAMPLE_INVENTORY))


@pytest.fixture
def failing_auth_client():
    return FakeClient(auth_error=AuthenticationError("got status code 401 instead of 200"))
