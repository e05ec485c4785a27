"""Tests for the Appium W3C HTTP client."""
from unittest.mock import MagicMock

import pytest
import requests

from automation_suite.mobile.appium_http_client import (
    W3C_ELEMENT_KEY,
    AppiumHTTPClient,
    AppiumHTTPError,
    WebDriverElementRef,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def client():
    client = AppiumHTTPClient("http://127.0.0.1:4723/")
    client._session = MagicMock()
    return client


def sent(client):
    return [(c.args[0], c.args[1], c.kwargs.get("json")) for c in client._session.request.call_args_list]


def test_create_and_delete_session(client):
    """Test the session lifecycle."""
    client._session.request.side_effect = [
        FakeResponse(payload={"value": {"sessionId": "abc", "capabilities": {}}}),
        FakeResponse(payload={"value": None}),
    ]
    assert client.create_session({"capabilities": {"alwaysMatch": {}}}) == "abc"
    client.delete_session()
    assert client.session_id is None
    assert sent(client)[1][:2] == ("DELETE", "http://127.0.0.1:4723/session/abc")


def test_create_session_without_id(client):
    """Test a malformed new-session response."""
    client._session.request.return_value = FakeResponse(payload={"value": {}})
    with pytest.raises(AppiumHTTPError):
        client.create_session({"capabilities": {}})


def test_commands_need_a_session(client):
    """Test that element commands require a session."""
    with pytest.raises(RuntimeError):
        client.get_element_text(WebDriverElementRef("e1"))


def test_find_elements_extracts_ids(client):
    """Test W3C and legacy element payloads."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(
        payload={"value": [{W3C_ELEMENT_KEY: "e1"}, {"ELEMENT": "e2"}]}
    )
    elements = client.find_elements(using="xpath", value="//a")
    assert elements == [WebDriverElementRef("e1"), WebDriverElementRef("e2")]
    assert sent(client) == [
        ("POST", "http://127.0.0.1:4723/session/abc/elements", {"using": "xpath", "value": "//a"})
    ]


def test_http_error_carries_details(client):
    """Test that WebDriver errors surface their message."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(
        status_code=404, payload={"value": {"error": "no such element", "message": "not found"}}
    )
    with pytest.raises(AppiumHTTPError) as exc:
        client.get_element_text(WebDriverElementRef("e1"))
    assert exc.value.status_code == 404
    assert "not found" in str(exc.value)


def test_transport_errors_are_wrapped(client):
    """Test that connection failures become AppiumHTTPError."""
    client.session_id = "abc"
    client._session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(AppiumHTTPError, match="Failed to call Appium server"):
        client.back()


def test_non_json_response(client):
    """Test a server answering with plain text."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(payload=None, text="<html>")
    with pytest.raises(AppiumHTTPError, match="non-JSON"):
        client.get_element_text(WebDriverElementRef("e1"))


def test_tap_sends_pointer_actions_then_releases(client):
    """Test W3C pointer actions for a coordinate tap."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(payload={"value": None})
    client.tap(x=510, y=245)
    (post_method, post_url, payload), (delete_method, delete_url, _) = sent(client)
    assert (post_method, delete_method) == ("POST", "DELETE")
    assert post_url == delete_url == "http://127.0.0.1:4723/session/abc/actions"
    pointer = payload["actions"][0]
    assert pointer["parameters"] == {"pointerType": "touch"}
    assert pointer["actions"][0] == {"type": "pointerMove", "duration": 0, "x": 510, "y": 245}


def test_mobile_extensions(client):
    """Test key presses and activity starts through execute/sync."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(payload={"value": None})
    client.press_keycode(3)
    client.start_activity(app_package="com.android.dialer", app_activity=".Main")
    scripts = [(url, body) for _, url, body in sent(client)]
    assert scripts == [
        ("http://127.0.0.1:4723/session/abc/execute/sync", {"script": "mobile: pressKey", "args": [{"keycode": 3}]}),
        (
            "http://127.0.0.1:4723/session/abc/execute/sync",
            {"script": "mobile: startActivity", "args": [{"component": "com.android.dialer/.Main"}]},
        ),
    ]


def test_send_keys_sends_text_and_chars(client):
    """Test the value payload."""
    client.session_id = "abc"
    client._session.request.return_value = FakeResponse(payload={"value": None})
    client.send_keys(WebDriverElementRef("e1"), text="12")
    assert sent(client)[0][2] == {"text": "12", "value": ["1", "2"]}
