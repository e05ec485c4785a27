from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

W3C_ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class AppiumHTTPError(RuntimeError):
    def __init__(
        self,
        *,
        message: str,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        response_json: Optional[dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response_json = response_json
        self.response_text = response_text


@dataclass(frozen=True)
class WebDriverElementRef:
    element_id: str


def _extract_webdriver_value(payload: dict[str, Any]) -> Any:
    # W3C WebDriver wraps results in {"value": ...}
    if "value" in payload:
        return payload["value"]
    return payload


def _extract_element_id(element_obj: Any) -> str:
    if not isinstance(element_obj, dict):
        raise ValueError(f"Unexpected element payload type: {type(element_obj)}")
    if element_obj.get(W3C_ELEMENT_KEY):
        return str(element_obj[W3C_ELEMENT_KEY])
    # Legacy JSONWire key
    if element_obj.get("ELEMENT"):
        return str(element_obj["ELEMENT"])
    raise ValueError(f"Could not extract element id from payload keys: {list(element_obj.keys())}")


class AppiumHTTPClient:
    """
    Thin Appium client over the W3C WebDriver HTTP endpoints.

    Only the commands the mobile helper needs are covered: session lifecycle,
    element lookup and interaction, pointer taps, key events and activities.
    """

    def __init__(self, server_url: str, *, timeout_s: float = 30.0) -> None:
        if not server_url:
            raise ValueError("server_url is required")
        self.server_url = server_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session_id: Optional[str] = None
        self._session = requests.Session()

    def _request(self, method: str, path: str, *, json: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        url = f"{self.server_url}{path}"
        try:
            response = self._session.request(method, url, json=json, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise AppiumHTTPError(
                message=f"Failed to call Appium server: {e}",
                method=method,
                url=url,
            ) from e

        response_text = None
        response_json: Optional[dict[str, Any]] = None
        try:
            response_json = response.json()
        except ValueError:
            response_text = response.text

        if response.status_code >= 400:
            details = None
            if response_json is not None:
                value = _extract_webdriver_value(response_json)
                if isinstance(value, dict):
                    details = value.get("message") or value.get("error")
            raise AppiumHTTPError(
                message=f"Appium HTTP {response.status_code} for {method} {path}"
                + (f": {details}" if details else ""),
                method=method,
                url=url,
                status_code=response.status_code,
                response_json=response_json,
                response_text=response_text,
            )

        if not isinstance(response_json, dict):
            raise AppiumHTTPError(
                message=f"Appium returned non-JSON response for {method} {path}",
                method=method,
                url=url,
                status_code=response.status_code,
                response_text=response_text,
            )
        return response_json

    def _session_path(self, suffix: str = "") -> str:
        if not self.session_id:
            raise RuntimeError("No active Appium session. Call create_session() first.")
        return f"/session/{self.session_id}{suffix}"

    def _value(self, method: str, suffix: str, *, expect: type, json: Optional[dict[str, Any]] = None) -> Any:
        path = self._session_path(suffix)
        response = self._request(method, path, json=json)
        value = _extract_webdriver_value(response)
        if not isinstance(value, expect):
            raise AppiumHTTPError(
                message=f"Unexpected {suffix or '/'} response shape (expected {expect.__name__})",
                method=method,
                url=f"{self.server_url}{path}",
                response_json=response,
            )
        return value

    def create_session(self, session_payload: dict[str, Any]) -> str:
        """
        Create an Appium session from a WebDriver new-session payload, e.g.
          {"capabilities": {"alwaysMatch": {...}, "firstMatch": [{}]}}
        """
        if not isinstance(session_payload, dict) or not session_payload:
            raise ValueError("session_payload must be a non-empty dict")

        response = self._request("POST", "/session", json=session_payload)
        value = _extract_webdriver_value(response)
        session_id = value.get("sessionId") if isinstance(value, dict) else None
        session_id = session_id or response.get("sessionId")
        if not session_id:
            raise AppiumHTTPError(
                message="Appium did not return a sessionId in the create_session response",
                method="POST",
                url=f"{self.server_url}/session",
                response_json=response,
            )
        self.session_id = str(session_id)
        return self.session_id

    def delete_session(self) -> None:
        if not self.session_id:
            return
        session_id = self.session_id
        try:
            self._request("DELETE", f"/session/{session_id}")
        finally:
            self.session_id = None

    def find_elements(self, *, using: str, value: str) -> list[WebDriverElementRef]:
        if not using or not value:
            raise ValueError("'using' and 'value' are required to find elements")
        payload = self._value("POST", "/elements", expect=list, json={"using": using, "value": value})
        return [WebDriverElementRef(element_id=_extract_element_id(item)) for item in payload]

    def is_displayed(self, element: WebDriverElementRef) -> bool:
        return bool(self._value("GET", f"/element/{element.element_id}/displayed", expect=bool))

    def get_element_text(self, element: WebDriverElementRef) -> str:
        return self._value("GET", f"/element/{element.element_id}/text", expect=str)

    def get_element_attribute(self, element: WebDriverElementRef, name: str) -> Optional[str]:
        response = self._request("GET", self._session_path(f"/element/{element.element_id}/attribute/{name}"))
        value = _extract_webdriver_value(response)
        return None if value is None else str(value)

    def click(self, element: WebDriverElementRef) -> None:
        self._request("POST", self._session_path(f"/element/{element.element_id}/click"), json={})

    def clear(self, element: WebDriverElementRef) -> None:
        self._request("POST", self._session_path(f"/element/{element.element_id}/clear"), json={})

    def send_keys(self, element: WebDriverElementRef, *, text: str) -> None:
        if text is None:
            raise ValueError("text must not be None")
        # Servers differ on `text` vs `value` (array of chars); send both.
        self._request(
            "POST",
            self._session_path(f"/element/{element.element_id}/value"),
            json={"text": text, "value": list(text)},
        )

    def tap(self, *, x: int, y: int, hold_ms: int = 100) -> None:
        self.perform_actions(
            [
                {"type": "pointerMove", "duration": 0, "x": int(x), "y": int(y)},
                {"type": "pointerDown", "button": 0},
                {"type": "pause", "duration": int(hold_ms)},
                {"type": "pointerUp", "button": 0},
            ]
        )

    def perform_actions(self, pointer_actions: list[dict[str, Any]]) -> None:
        payload = {
            "actions": [
                {
                    "type": "pointer",
                    "id": "finger1",
                    "parameters": {"pointerType": "touch"},
                    "actions": pointer_actions,
                }
            ]
        }
        self._request("POST", self._session_path("/actions"), json=payload)
        self._request("DELETE", self._session_path("/actions"))

    def execute_script(self, script: str, args: Optional[list[Any]] = None) -> Any:
        response = self._request("POST", self._session_path("/execute/sync"), json={"script": script, "args": args or []})
        return _extract_webdriver_value(response)

    def press_keycode(self, keycode: int) -> None:
        self.execute_script("mobile: pressKey", [{"keycode": int(keycode)}])

    def start_activity(self, *, app_package: str, app_activity: str) -> None:
        self.execute_script("mobile: startActivity", [{"component": f"{app_package}/{app_activity}"}])

    def back(self) -> None:
        self._request("POST", self._session_path("/back"), json={})
