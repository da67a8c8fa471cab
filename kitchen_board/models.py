"""Domain models for the kitchen board."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from kitchen_board.constant import STATUS_LABEL_DELETED, STATUS_LABEL_SERVED


class OrderStatus(Enum):
    """Three-state order status; ACTIVE has no label on the wire."""

    ACTIVE = ""
    SERVED = STATUS_LABEL_SERVED
    DELETED = STATUS_LABEL_DELETED

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_historical(self) -> bool:
        return self is not OrderStatus.ACTIVE


class View(Enum):
    """Mutually exclusive dashboard views."""

    MAIN = "main"
    REVENUE = "revenue"
    HISTORY = "history"


@dataclass(frozen=True)
class Order:
    """One order row from the remote store."""

    row_index: int
    order_number: str = ""
    timestamp: datetime | None = None
    items: tuple[str, ...] = ()
    total_price: float = 0.0
    status: OrderStatus = OrderStatus.ACTIVE


@dataclass(frozen=True)
class OrderSnapshot:
    """Partitioned result of one full fetch."""

    active: list[Order] = field(default_factory=list)
    historical: list[Order] = field(default_factory=list)
    today_revenue: float = 0.0
