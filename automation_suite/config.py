from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .errors import SuiteConfigError

DEFAULT_APPIUM_SERVER_URL = "http://127.0.0.1:4723"
DEFAULT_EXPLICIT_WAIT_S = 30.0

_DOTENV_LOADED = False


def load_json_file(path: str | Path) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")
    if file_path.is_dir():
        raise IsADirectoryError(f"Expected a JSON file but found a directory: {file_path}")

    raw = file_path.read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected top-level JSON object in {file_path}")
    return data


def require_key(obj: dict[str, Any], key: str, *, context: str) -> Any:
    if key not in obj:
        raise ValueError(f"Missing required key '{key}' in {context}")
    return obj[key]


def _parse_dotenv_line(raw_line: str) -> Optional[tuple[str, str]]:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].strip()
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        value = value[1:-1]
    return key, value


def load_dotenv(path: str | Path, *, override: bool = False) -> dict[str, str]:
    """
    Load KEY=VALUE pairs from a .env file into os.environ.

    Existing variables win unless override=True. Returns the keys that were set.
    """
    dotenv_path = Path(path).expanduser().resolve()
    if not dotenv_path.exists():
        return {}
    if dotenv_path.is_dir():
        raise SuiteConfigError(f".env path is a directory: {dotenv_path}")

    loaded: dict[str, str] = {}
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_dotenv_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if not override and os.environ.get(key) is not None:
            continue
        os.environ[key] = value
        loaded[key] = value
    return loaded


def ensure_dotenv_loaded() -> dict[str, str]:
    """
    Load $AI_DOTENV_PATH (default ./.env) exactly once per process.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return {}
    loaded = load_dotenv(os.environ.get("AI_DOTENV_PATH") or Path.cwd() / ".env")
    _DOTENV_LOADED = True
    return loaded


def _env_bool(environ: dict[str, str], key: str, *, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise SuiteConfigError(f"{key} must be a boolean, got {raw!r}")


def _env_float(environ: dict[str, str], key: str, *, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        parsed = float(raw)
    except ValueError as e:
        raise SuiteConfigError(f"{key} must be a number, got {raw!r}") from e
    if parsed < 0:
        raise SuiteConfigError(f"{key} must be >= 0")
    return parsed


@dataclass(frozen=True)
class SuiteSettings:
    workspace_dir: Path
    test_data_dir: Path
    locator_dir: Path
    appium_server_url: str
    capabilities_json_path: Optional[Path]
    base_url: Optional[str]
    browser: str
    headless: bool
    explicit_wait_s: float
    # only AI_PW=false switches toggle controls from click to check_option
    ai_pw: bool

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "SuiteSettings":
        env = dict(os.environ if environ is None else environ)

        workspace_dir = Path(env.get("AI_WORKSPACE_DIR") or Path.cwd()).expanduser().resolve()
        test_data_dir = Path(env.get("AI_TEST_DATA_DIR") or workspace_dir / "testdata").expanduser().resolve()
        locator_dir = Path(env.get("AI_LOCATOR_DIR") or workspace_dir / "locators").expanduser().resolve()

        caps_raw = env.get("AI_CAPABILITIES_JSON")
        capabilities_json_path = Path(caps_raw).expanduser().resolve() if caps_raw else None

        browser = (env.get("AI_BROWSER") or "chromium").strip().lower()
        if browser not in {"chromium", "firefox", "webkit"}:
            raise SuiteConfigError(f"AI_BROWSER must be chromium, firefox or webkit, got {browser!r}")

        return cls(
            workspace_dir=workspace_dir,
            test_data_dir=test_data_dir,
            locator_dir=locator_dir,
            appium_server_url=(env.get("AI_APPIUM_SERVER_URL") or DEFAULT_APPIUM_SERVER_URL).rstrip("/"),
            capabilities_json_path=capabilities_json_path,
            base_url=env.get("AI_BASE_URL") or None,
            browser=browser,
            headless=_env_bool(env, "AI_HEADLESS", default=True),
            explicit_wait_s=_env_float(env, "AI_EXPLICIT_WAIT", default=DEFAULT_EXPLICIT_WAIT_S),
            ai_pw=(env.get("AI_PW") or "").strip() != "false",
        )

    def load_capabilities(self) -> dict[str, Any]:
        if self.capabilities_json_path is None:
            raise SuiteConfigError("AI_CAPABILITIES_JSON is required for mobile scenarios")
        payload = load_json_file(self.capabilities_json_path)
        require_key(payload, "capabilities", context=str(self.capabilities_json_path))
        return payload
