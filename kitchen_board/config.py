"""Runtime configuration defaults for the order store and polling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENDPOINT_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbxJNZAJodWgPYkhN5m-MnGS8a8hqrErhfO87TO8BpNMSdjUg27bWMiGGIY9F51oEKRc/exec"
)
POLL_INTERVAL_SECONDS = 30.0
REQUEST_TIMEOUT_SECONDS = 10.0
DEBUG_LOG_PATH = "/tmp/kitchen-board-debug.log"

_ENDPOINT_ENV = "KITCHEN_BOARD_ENDPOINT_URL"
_POLL_ENV = "KITCHEN_BOARD_POLL_SECONDS"
_TIMEOUT_ENV = "KITCHEN_BOARD_TIMEOUT_SECONDS"
_DEBUG_LOG_ENV = "KITCHEN_BOARD_DEBUG_LOG"


@dataclass(frozen=True)
class DashboardConfig:
    """Settings injected into the sync client, action client and app."""

    endpoint_url: str = ENDPOINT_URL
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    debug_log_path: str = DEBUG_LOG_PATH


def _positive_seconds(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {raw!r}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> DashboardConfig:
    """
    Build a config from defaults plus environment overrides.

    Recognized variables:
    1. KITCHEN_BOARD_ENDPOINT_URL
    2. KITCHEN_BOARD_POLL_SECONDS
    3. KITCHEN_BOARD_TIMEOUT_SECONDS
    4. KITCHEN_BOARD_DEBUG_LOG
    """
    env = os.environ if environ is None else environ

    endpoint_url = env.get(_ENDPOINT_ENV, "").strip() or ENDPOINT_URL
    poll_interval = POLL_INTERVAL_SECONDS
    if env.get(_POLL_ENV, "").strip():
        poll_interval = _positive_seconds(_POLL_ENV, env[_POLL_ENV].strip())
    timeout = REQUEST_TIMEOUT_SECONDS
    if env.get(_TIMEOUT_ENV, "").strip():
        timeout = _positive_seconds(_TIMEOUT_ENV, env[_TIMEOUT_ENV].strip())
    debug_log_path = env.get(_DEBUG_LOG_ENV, "").strip() or DEBUG_LOG_PATH

    return DashboardConfig(
        endpoint_url=endpoint_url,
        poll_interval_seconds=poll_interval,
        request_timeout_seconds=timeout,
        debug_log_path=debug_log_path,
    )
