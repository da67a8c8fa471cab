"""Status change requests against the order store."""

from __future__ import annotations

import requests

from kitchen_board.config import DashboardConfig
from kitchen_board.constant import MODE_CONFIRM, MODE_RESTORE, MODE_SOFT_DELETE
from kitchen_board.debug_log import DebugLog
from kitchen_board.errors import NetworkError
from kitchen_board.models import Order
from kitchen_board.store import mutation_form
from kitchen_board.sync import OrderSync


class OrderActions:
    """Sends confirm / soft-delete / restore and resyncs after each success."""

    def __init__(
        self,
        config: DashboardConfig,
        sync: OrderSync,
        session: requests.Session | None = None,
        debug_log: DebugLog | None = None,
    ) -> None:
        self.config = config
        self.sync = sync
        self.session = session if session is not None else sync.session
        self.debug_log = debug_log if debug_log is not None else sync.debug_log

    def confirm(self, order: Order) -> None:
        self.perform(MODE_CONFIRM, order)

    def soft_delete(self, order: Order) -> None:
        self.perform(MODE_SOFT_DELETE, order)

    def restore(self, order: Order) -> None:
        self.perform(MODE_RESTORE, order)

    def perform(self, mode: str, order: Order) -> None:
        """POST one status change, then refetch; raises NetworkError on failure."""
        self.debug_log.write(f"action_send mode={mode} row_index={order.row_index}")
        try:
            response = self.session.post(
                self.config.endpoint_url,
                data=mutation_form(mode, order),
                timeout=self.config.request_timeout_seconds,
            )
        except requests.RequestException as exc:
            self.debug_log.write(f"action_failed mode={mode} row_index={order.row_index} error={exc!r}")
            raise NetworkError(str(exc), mode) from exc

        if not response.ok:
            self.debug_log.write(
                f"action_failed mode={mode} row_index={order.row_index} status={response.status_code}"
            )
            raise NetworkError(f"HTTP error! status: {response.status_code}", mode, status_code=response.status_code)

        self.sync.fetch_all()
