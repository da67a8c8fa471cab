"""Decode order store records and encode mutation requests."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from kitchen_board.constant import (
    FIELD_ITEMS,
    FIELD_ORDER_NUMBER,
    FIELD_ROW_INDEX,
    FIELD_STATUS,
    FIELD_TIMESTAMP,
    FIELD_TOTAL_PRICE,
    ITEM_SEPARATOR,
    MODE_FETCH,
)
from kitchen_board.errors import ParseError
from kitchen_board.models import Order, OrderStatus

_STATUS_BY_LABEL: dict[str, OrderStatus] = {status.label: status for status in OrderStatus}


class UnknownStatus(ValueError):
    """A record carries a status label outside the three known states."""


def parse_status(raw: Any) -> OrderStatus:
    """Map a raw status cell to an OrderStatus; absent, null and empty mean ACTIVE."""
    if raw is None:
        return OrderStatus.ACTIVE
    status = _STATUS_BY_LABEL.get(str(raw))
    if status is None:
        raise UnknownStatus(str(raw))
    return status


def parse_items(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    return tuple(part.strip() for part in str(raw).split(ITEM_SEPARATOR))


def parse_timestamp(raw: Any) -> datetime | None:
    if not raw:
        return None
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_price(raw: Any) -> float:
    if raw is None or raw == "":
        return 0.0
    if isinstance(raw, bool):
        raise ParseError(f"invalid {FIELD_TOTAL_PRICE}: {raw!r}", MODE_FETCH)
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ParseError(f"invalid {FIELD_TOTAL_PRICE}: {raw!r}", MODE_FETCH) from None


def _parse_row_index(raw: Any) -> int:
    if isinstance(raw, bool) or raw is None:
        raise ParseError(f"invalid {FIELD_ROW_INDEX}: {raw!r}", MODE_FETCH)
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ParseError(f"invalid {FIELD_ROW_INDEX}: {raw!r}", MODE_FETCH)
        return int(raw)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ParseError(f"invalid {FIELD_ROW_INDEX}: {raw!r}", MODE_FETCH) from None


def parse_order(record: Any) -> Order:
    """Decode one JSON record; raises ParseError or UnknownStatus."""
    if not isinstance(record, dict):
        raise ParseError(f"order record must be an object, got {type(record).__name__}", MODE_FETCH)
    if FIELD_ROW_INDEX not in record:
        raise ParseError(f"order record is missing {FIELD_ROW_INDEX}", MODE_FETCH)

    order_number = record.get(FIELD_ORDER_NUMBER)
    return Order(
        row_index=_parse_row_index(record[FIELD_ROW_INDEX]),
        order_number="" if order_number is None else str(order_number),
        timestamp=parse_timestamp(record.get(FIELD_TIMESTAMP)),
        items=parse_items(record.get(FIELD_ITEMS)),
        total_price=_parse_price(record.get(FIELD_TOTAL_PRICE)),
        status=parse_status(record.get(FIELD_STATUS)),
    )


def parse_orders(payload: Any, on_skip: Callable[[Any, str], None] | None = None) -> list[Order]:
    """
    Decode the full order collection, keeping store order.

    Records that cannot be shown (an unknown status label, a missing or
    non-integer row index, a non-numeric price) are skipped and reported
    through ``on_skip`` with the record and the reason. Only a payload that
    is not a list fails the whole collection.
    """
    if not isinstance(payload, list):
        raise ParseError(f"order collection must be a list, got {type(payload).__name__}", MODE_FETCH)

    orders: list[Order] = []
    for record in payload:
        try:
            orders.append(parse_order(record))
        except (UnknownStatus, ParseError) as exc:
            if on_skip is not None:
                on_skip(record, str(exc))
    return orders


def mutation_form(mode: str, order: Order) -> dict[str, str]:
    """Form body for a status change request."""
    return {"mode": mode, FIELD_ROW_INDEX: str(order.row_index)}
