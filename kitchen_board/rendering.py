"""Rendering helpers for order cards and the revenue badge."""

from __future__ import annotations

from rich.text import Text

from kitchen_board.constant import (
    ITEMS_LABEL,
    ORDER_NUMBER_LABEL,
    REVENUE_BADGE_LABEL,
    TIME_LABEL,
)
from kitchen_board.models import Order, OrderStatus


def status_style(status: OrderStatus) -> str:
    """Return a consistent style for a status tag."""
    if status is OrderStatus.DELETED:
        return "bold #ffffff on #b23a48"
    if status is OrderStatus.SERVED:
        return "bold #ffffff on #5c5c5c"
    return "bold #0b1f0f on #5fbf72"


def format_price(amount: float) -> str:
    """Card price as stored; whole amounts drop the trailing ``.0``."""
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount}"


def format_time(order: Order) -> str:
    if order.timestamp is None:
        return "-"
    return order.timestamp.astimezone().strftime("%H:%M:%S")


def format_revenue_badge(revenue: float) -> Text:
    text = Text()
    text.append(f" {REVENUE_BADGE_LABEL}: ${revenue:.0f} ", style="bold #1d4ed8 on #dbeafe")
    return text


def format_order_card(order: Order, selected: bool = False) -> Text:
    """Render one order with its number, time, price, status tag and items."""
    deleted = order.status is OrderStatus.DELETED
    body_style = "strike dim" if deleted else ""

    text = Text()
    text.append("➤ " if selected else "  ")
    text.append(f"{ORDER_NUMBER_LABEL}: {order.order_number}", style=f"bold {body_style}".strip())
    text.append(f"  {TIME_LABEL}: {format_time(order)}", style="dim")
    price_style = "bold #b23a48" if deleted else "bold #5fbf72"
    if order.status is OrderStatus.SERVED:
        price_style = "bold #8a8a8a"
    text.append(f"  {format_price(order.total_price)}", style=price_style)
    if order.status.is_historical:
        text.append(" ")
        text.append(f" {order.status.label} ", style=status_style(order.status))

    text.append(f"\n    {ITEMS_LABEL}:", style=body_style)
    for item in order.items:
        text.append(f"\n      • {item}", style=body_style)
    return text


def format_order_list(orders: list[Order], selected_index: int | None, start: int = 0, end: int | None = None) -> Text:
    """Render a window of order cards separated by blank lines."""
    stop = len(orders) if end is None else end
    lines = Text()
    if start > 0:
        lines.append("⋮\n", style="dim")

    for idx in range(start, stop):
        if idx > start:
            lines.append("\n\n")
        lines.append_text(format_order_card(orders[idx], selected=idx == selected_index))

    if stop < len(orders):
        lines.append("\n⋮", style="dim")
    return lines
