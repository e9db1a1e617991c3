# tests/test_api.py
import pytest
import requests

from utils.api import DEFAULT_TIMEOUT, HubSpotAPI
from utils.errors import RemoteRequestError


def test_api_requires_token():
    with pytest.raises(ValueError):
        HubSpotAPI("")


def test_api_initialization():
    api = HubSpotAPI("fake_token")
    assert api.base_url == "https://api.hubapi.com/"
    assert api.timeout == DEFAULT_TIMEOUT == 10
    assert api.session.headers["Authorization"] == "Bearer fake_token"


def test_get_sends_bearer_and_params(requests_mock):
    api = HubSpotAPI("fake_token", base_url="https://api.test")
    requests_mock.get("https://api.test/marketing/v3/forms", json={"results": []})

    data = api.get("/marketing/v3/forms", params={"limit": 100, "after": None})

    assert data == {"results": []}
    req = requests_mock.request_history[0]
    assert req.headers["Authorization"] == "Bearer fake_token"
    assert req.qs == {"limit": ["100"]}  # None params are dropped
    assert req.timeout == 10


def test_endpoint_with_or_without_leading_slash(requests_mock):
    api = HubSpotAPI("t", base_url="https://api.test/")
    requests_mock.get("https://api.test/a/b", json={"ok": True})
    assert api.get("a/b") == {"ok": True}
    assert api.get("/a/b") == {"ok": True}


def test_http_error_is_not_retried(requests_mock):
    api = HubSpotAPI("t", base_url="https://api.test")
    requests_mock.get("https://api.test/boom", [
        {"status_code": 500, "json": {"error": "boom"}},
        {"status_code": 200, "json": {"ok": True}},
    ])

    with pytest.raises(RemoteRequestError) as ei:
        api.get("/boom")

    assert ei.value.status_code == 500
    assert ei.value.url == "https://api.test/boom"
    assert isinstance(ei.value.__cause__, requests.HTTPError)
    assert len(requests_mock.request_history) == 1


def test_rate_limit_fails_fast(requests_mock):
    api = HubSpotAPI("t", base_url="https://api.test")
    requests_mock.get("https://api.test/limited", status_code=429, headers={"Retry-After": "1"})

    with pytest.raises(RemoteRequestError) as ei:
        api.get("/limited")

    assert ei.value.status_code == 429
    assert len(requests_mock.request_history) == 1


def test_timeout_becomes_remote_error(requests_mock):
    api = HubSpotAPI("t", base_url="https://api.test")
    requests_mock.get("https://api.test/slow", exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(RemoteRequestError) as ei:
        api.get("/slow")

    assert ei.value.status_code is None
    assert isinstance(ei.value.__cause__, requests.Timeout)


def test_non_json_body_is_remote_error(requests_mock):
    api = HubSpotAPI("t", base_url="https://api.test")
    requests_mock.get("https://api.test/html", text="<html>maintenance</html>")

    with pytest.raises(RemoteRequestError):
        api.get("/html")
