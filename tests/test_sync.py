import threading

import pytest

from kitchen_board.errors import NetworkError, ParseError
from kitchen_board.models import Order, OrderStatus
from kitchen_board.sync import OrderSync, partition_orders


def _order(row_index, status=OrderStatus.ACTIVE, price=0.0):
    return Order(row_index=row_index, total_price=price, status=status)


def test_partition_scenario(config, store):
    sync = OrderSync(config, session=store)

    assert sync.fetch_all() is True

    assert [order.row_index for order in sync.active] == [1]
    assert [order.row_index for order in sync.historical] == [3, 2]
    assert sync.today_revenue == 50
    assert sync.loading is False


def test_partition_covers_every_order_exactly_once():
    orders = [
        _order(1),
        _order(2, OrderStatus.SERVED, 10),
        _order(3),
        _order(4, OrderStatus.DELETED, 99),
        _order(5, OrderStatus.SERVED, 15.5),
    ]
    snapshot = partition_orders(orders)

    assert [o.row_index for o in snapshot.active] == [1, 3]
    assert [o.row_index for o in snapshot.historical] == [5, 4, 2]
    active_ids = {o.row_index for o in snapshot.active}
    historical_ids = {o.row_index for o in snapshot.historical}
    assert active_ids.isdisjoint(historical_ids)
    assert active_ids | historical_ids == {o.row_index for o in orders}


def test_historical_is_reverse_of_input_order_not_a_time_sort():
    orders = [_order(9, OrderStatus.SERVED), _order(2, OrderStatus.DELETED), _order(5, OrderStatus.SERVED)]
    assert [o.row_index for o in partition_orders(orders).historical] == [5, 2, 9]


def test_revenue_ignores_active_and_deleted_orders():
    orders = [_order(1, price=1000), _order(2, OrderStatus.DELETED, 500), _order(3, OrderStatus.SERVED, 42)]
    assert partition_orders(orders).today_revenue == 42


def test_empty_collection():
    snapshot = partition_orders([])
    assert snapshot.active == []
    assert snapshot.historical == []
    assert snapshot.today_revenue == 0


def test_http_error_keeps_prior_values(config, store):
    sync = OrderSync(config, session=store)
    sync.fetch_all()

    store.fail_get_status = 500
    with pytest.raises(NetworkError) as excinfo:
        sync.fetch_all()

    assert excinfo.value.status_code == 500
    assert excinfo.value.operation == "fetch"
    assert "500" in str(excinfo.value)
    assert sync.loading is False
    assert [order.row_index for order in sync.active] == [1]
    assert [order.row_index for order in sync.historical] == [3, 2]
    assert sync.today_revenue == 50


def test_transport_failure_is_a_network_error(config, store):
    store.transport_error = True
    sync = OrderSync(config, session=store)

    with pytest.raises(NetworkError) as excinfo:
        sync.fetch_all()

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)
    assert sync.loading is False


def test_invalid_body_is_a_parse_error(config, store):
    store.invalid_json = True
    sync = OrderSync(config, session=store)

    with pytest.raises(ParseError):
        sync.fetch_all()
    assert sync.active == []


def test_loading_flag_is_set_while_request_is_in_flight(config, store):
    seen = []
    sync = OrderSync(config, session=store)
    sync.listener = lambda: seen.append(sync.loading)

    sync.fetch_all()

    assert seen[0] is True
    assert seen[-1] is False


def test_failures_are_written_to_the_debug_log(config, store, tmp_path):
    store.fail_get_status = 503
    sync = OrderSync(config, session=store)

    with pytest.raises(NetworkError):
        sync.fetch_all()

    log_text = (tmp_path / "debug.log").read_text(encoding="utf-8")
    assert "fetch_failed" in log_text
    assert "503" in log_text


class _GatedSession:
    """Holds the first GET until released so a later GET can finish first."""

    def __init__(self, store):
        self.store = store
        self.first_started = threading.Event()
        self.release_first = threading.Event()
        self._calls = 0
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        with self._lock:
            self._calls += 1
            call = self._calls
        if call == 1:
            response = self.store.get(url, timeout=timeout)
            self.first_started.set()
            self.release_first.wait(timeout=5)
            return response
        return self.store.get(url, timeout=timeout)


def test_stale_response_is_discarded(config, make_store):
    store = make_store([{"rowIndex": 1, "總價": 10, "狀態": ""}])
    session = _GatedSession(store)
    sync = OrderSync(config, session=session)
    results = {}

    slow = threading.Thread(target=lambda: results.setdefault("slow", sync.fetch_all()))
    slow.start()
    assert session.first_started.wait(timeout=5)

    store.records[0]["狀態"] = "已出餐"
    assert sync.fetch_all() is True
    session.release_first.set()
    slow.join(timeout=5)

    assert results["slow"] is False
    assert sync.active == []
    assert [order.row_index for order in sync.historical] == [1]
    assert sync.today_revenue == 10
    assert sync.loading is False


def test_bad_row_is_skipped_and_the_rest_still_applies(config, make_store, tmp_path):
    store = make_store(
        [
            {"rowIndex": 1, "總價": 100, "狀態": ""},
            {"rowIndex": 2, "總價": "N/A", "狀態": "已出餐"},
            {"rowIndex": 3, "總價": 30, "狀態": "已出餐"},
        ]
    )
    sync = OrderSync(config, session=store)

    assert sync.fetch_all() is True

    assert [order.row_index for order in sync.active] == [1]
    assert [order.row_index for order in sync.historical] == [3]
    assert sync.today_revenue == 30
    assert "fetch_skip_record" in (tmp_path / "debug.log").read_text(encoding="utf-8")
