"""Full-collection fetches from the order store."""

from __future__ import annotations

import threading
from typing import Callable, Iterable

import requests

from kitchen_board.config import DashboardConfig
from kitchen_board.constant import MODE_FETCH
from kitchen_board.debug_log import DebugLog
from kitchen_board.errors import DashboardError, NetworkError, ParseError
from kitchen_board.models import Order, OrderSnapshot, OrderStatus
from kitchen_board.store import parse_orders


def partition_orders(orders: Iterable[Order]) -> OrderSnapshot:
    """Split orders into active and historical lists and total served revenue."""
    ordered = list(orders)
    active = [order for order in ordered if order.status is OrderStatus.ACTIVE]
    historical = [order for order in ordered if order.status.is_historical]
    historical.reverse()
    # Summed over every served order; the store rows carry no business-day field.
    revenue = sum(order.total_price for order in ordered if order.status is OrderStatus.SERVED)
    return OrderSnapshot(active=active, historical=historical, today_revenue=revenue)


class OrderSync:
    """
    Owns the latest fetched snapshot and the loading flag.

    Every fetch takes a sequence number. A response is applied only when its
    number is newer than the last applied one, so an older request that
    resolves late cannot overwrite fresher data.
    """

    def __init__(
        self,
        config: DashboardConfig,
        session: requests.Session | None = None,
        listener: Callable[[], None] | None = None,
        debug_log: DebugLog | None = None,
    ) -> None:
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.listener = listener
        self.debug_log = debug_log if debug_log is not None else DebugLog(config.debug_log_path)
        self._lock = threading.Lock()
        self._next_sequence = 0
        self._applied_sequence = 0
        self._in_flight = 0
        self._snapshot = OrderSnapshot()

    @property
    def active(self) -> list[Order]:
        return list(self._snapshot.active)

    @property
    def historical(self) -> list[Order]:
        return list(self._snapshot.historical)

    @property
    def today_revenue(self) -> float:
        return self._snapshot.today_revenue

    @property
    def snapshot(self) -> OrderSnapshot:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def fetch_all(self) -> bool:
        """
        Fetch and apply the full order collection.

        Returns False when the response arrived after a newer one had already
        been applied. Raises NetworkError or ParseError; prior values are kept
        on failure.
        """
        with self._lock:
            self._next_sequence += 1
            sequence = self._next_sequence
            self._in_flight += 1
        self.debug_log.write(f"fetch_start seq={sequence}")
        self._notify()

        try:
            snapshot = partition_orders(self._request_orders())
        except DashboardError as exc:
            self.debug_log.write(f"fetch_failed seq={sequence} error={exc!r}")
            raise
        finally:
            with self._lock:
                self._in_flight -= 1
            self._notify()

        with self._lock:
            if sequence <= self._applied_sequence:
                applied = False
            else:
                self._applied_sequence = sequence
                self._snapshot = snapshot
                applied = True

        if not applied:
            self.debug_log.write(f"fetch_stale seq={sequence} applied={self._applied_sequence}")
            return False

        self.debug_log.write(
            f"fetch_applied seq={sequence} active={len(snapshot.active)} "
            f"historical={len(snapshot.historical)} revenue={snapshot.today_revenue}"
        )
        self._notify()
        return True

    def _request_orders(self) -> list[Order]:
        try:
            response = self.session.get(self.config.endpoint_url, timeout=self.config.request_timeout_seconds)
        except requests.RequestException as exc:
            raise NetworkError(str(exc), MODE_FETCH) from exc

        if not response.ok:
            raise NetworkError(
                f"HTTP error! status: {response.status_code}",
                MODE_FETCH,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"response is not JSON: {exc}", MODE_FETCH) from exc

        return parse_orders(payload, on_skip=self._log_skipped)

    def _log_skipped(self, record: object, reason: str) -> None:
        self.debug_log.write(f"fetch_skip_record reason={reason!r} record={record!r}")

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener()
