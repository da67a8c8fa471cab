from __future__ import annotations

import copy

import pytest
import requests

from kitchen_board.config import DashboardConfig

STATUS_BY_MODE = {"confirm": "已出餐", "softDelete": "已刪除", "restore": ""}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: object = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = copy.deepcopy(payload)
        self._invalid_json = invalid_json

    def json(self) -> object:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return copy.deepcopy(self._payload)


class FakeOrderStore:
    """In-memory stand-in for the spreadsheet endpoint, used as a requests session."""

    def __init__(self, records: list[dict]) -> None:
        self.records = [dict(record) for record in records]
        self.fail_get_status: int | None = None
        self.fail_post_status: int | None = None
        self.transport_error = False
        self.invalid_json = False
        self.get_calls = 0
        self.posts: list[dict] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.get_calls += 1
        if self.transport_error:
            raise requests.ConnectionError("connection refused")
        if self.fail_get_status is not None:
            return FakeResponse(self.fail_get_status)
        if self.invalid_json:
            return FakeResponse(200, invalid_json=True)
        return FakeResponse(200, self.records)

    def post(self, url: str, data: dict | None = None, timeout: float | None = None) -> FakeResponse:
        data = dict(data or {})
        self.posts.append(data)
        if self.transport_error:
            raise requests.ConnectionError("connection refused")
        if self.fail_post_status is not None:
            return FakeResponse(self.fail_post_status)
        row_index = int(data["rowIndex"])
        for record in self.records:
            if record["rowIndex"] == row_index:
                record["狀態"] = STATUS_BY_MODE[data["mode"]]
        return FakeResponse(200, {"result": "success"})

    def status_of(self, row_index: int) -> str | None:
        for record in self.records:
            if record["rowIndex"] == row_index:
                return record.get("狀態")
        return None


SCENARIO_RECORDS = [
    {
        "rowIndex": 1,
        "訂單編號": "A001",
        "Timestamp": "2025-08-29T04:12:33.000Z",
        "品項": "牛肉麵, 滷蛋",
        "總價": 100,
        "狀態": "",
    },
    {
        "rowIndex": 2,
        "訂單編號": "A002",
        "Timestamp": "2025-08-29T04:20:00.000Z",
        "品項": "水餃",
        "總價": 50,
        "狀態": "已出餐",
    },
    {
        "rowIndex": 3,
        "訂單編號": "A003",
        "Timestamp": "2025-08-29T04:25:00.000Z",
        "品項": "紅茶",
        "總價": 30,
        "狀態": "已刪除",
    },
]


@pytest.fixture
def config(tmp_path) -> DashboardConfig:
    return DashboardConfig(
        endpoint_url="https://orders.example.test/exec",
        poll_interval_seconds=30.0,
        request_timeout_seconds=1.0,
        debug_log_path=str(tmp_path / "debug.log"),
    )


@pytest.fixture
def store() -> FakeOrderStore:
    return FakeOrderStore(SCENARIO_RECORDS)


@pytest.fixture
def make_store():
    return FakeOrderStore
