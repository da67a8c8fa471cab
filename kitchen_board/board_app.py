"""Main Textual app class."""

from __future__ import annotations

from typing import Callable

import requests
from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.timer import Timer
from textual.widgets import Header, Static

from kitchen_board.actions import OrderActions
from kitchen_board.config import DashboardConfig
from kitchen_board.constant import (
    ACTION_ERROR_MESSAGE,
    APP_SUB_TITLE,
    APP_TITLE,
    DAILY_CHART_CAPTION,
    DAILY_CHART_UNAVAILABLE,
    DELETE_PROMPT_MESSAGE,
    DELETE_PROMPT_TITLE,
    EMPTY_ACTIVE_TEXT,
    EMPTY_HISTORY_TEXT,
    ERROR_TITLES_BY_OPERATION,
    FETCH_ERROR_MESSAGE,
    HELP_TEXT,
    LOADING_TEXT,
    MODE_CONFIRM,
    MODE_FETCH,
    MODE_RESTORE,
    MODE_SOFT_DELETE,
    MONTHLY_REVENUE_CAPTION,
    MONTHLY_REVENUE_UNAVAILABLE,
    NAV_LABELS,
    VIEW_TITLES,
)
from kitchen_board.debug_log import DebugLog
from kitchen_board.dialog_modal import DialogModal
from kitchen_board.errors import DashboardError
from kitchen_board.models import Order, OrderStatus, View
from kitchen_board.rendering import format_order_list, format_revenue_badge
from kitchen_board.sync import OrderSync

_NAV_KEYS: dict[View, str] = {View.MAIN: "1", View.REVENUE: "2", View.HISTORY: "3"}


class RevenueBadge(Static):
    """Header badge with served revenue; clicking opens the revenue view."""

    def on_click(self) -> None:
        self.app.action_switch_view(View.REVENUE.value)


class KitchenBoardApp(App):
    """A Textual dashboard for pending, served and deleted kitchen orders."""

    TITLE = APP_TITLE
    SUB_TITLE = APP_SUB_TITLE

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #side-panel {
        width: 24;
        border: round $secondary;
        padding: 1;
    }

    #content-pane {
        width: 1fr;
        border: round $primary;
        padding: 1;
    }

    #top-bar {
        height: 1;
        margin-bottom: 1;
    }

    #view-title {
        width: 1fr;
        text-style: bold;
    }

    #revenue-badge {
        width: auto;
    }

    #orders-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #help-bar {
        height: 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    view = reactive(View.MAIN)
    sidebar_open = reactive(False)
    selected_row = reactive(None)

    BINDINGS = [
        ("j", "move_selection(1)", "Next order"),
        ("k", "move_selection(-1)", "Previous order"),
        ("down", "move_selection(1)", "Next order"),
        ("up", "move_selection(-1)", "Previous order"),
        ("c", "confirm_selected", "Confirm served"),
        ("d", "delete_selected", "Delete order"),
        ("u", "restore_selected", "Restore order"),
        ("r", "refresh", "Refresh"),
        ("m", "toggle_sidebar", "Navigation"),
        ("1", "switch_view('main')", "Orders"),
        ("2", "switch_view('revenue')", "Revenue"),
        ("3", "switch_view('history')", "History"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: DashboardConfig | None = None, session: requests.Session | None = None) -> None:
        super().__init__()
        self.board_config = config if config is not None else DashboardConfig()
        self.debug_log = DebugLog(self.board_config.debug_log_path)
        self.order_sync = OrderSync(
            self.board_config,
            session=session,
            listener=self._sync_changed,
            debug_log=self.debug_log,
        )
        self.order_actions = OrderActions(self.board_config, self.order_sync)
        self._poll_timer: Timer | None = None
        self.debug_log.write(f"app_init endpoint={self.board_config.endpoint_url!r}")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="side-panel"):
                yield Static("導覽", classes="pane-title")
                yield Static(id="nav-list")
            with Vertical(id="content-pane"):
                with Horizontal(id="top-bar"):
                    yield Static(id="view-title")
                    yield RevenueBadge(id="revenue-badge")
                yield Static(id="orders-list")
        yield Static(HELP_TEXT, id="help-bar")

    def on_mount(self) -> None:
        self._refresh_all()
        self.refresh_orders()
        self._poll_timer = self.set_interval(self.board_config.poll_interval_seconds, self._poll)

    def on_unmount(self) -> None:
        if self._poll_timer is not None:
            self._poll_timer.stop()
            self._poll_timer = None

    # -- network workers --------------------------------------------------

    def _poll(self) -> None:
        self.refresh_orders()

    @work(thread=True, group="sync")
    def refresh_orders(self) -> None:
        try:
            self.order_sync.fetch_all()
        except DashboardError as exc:
            self.call_from_thread(self._show_error, exc)

    @work(thread=True, group="actions")
    def run_order_action(self, mode: str, order: Order) -> None:
        try:
            self.order_actions.perform(mode, order)
        except DashboardError as exc:
            self.call_from_thread(self._show_error, exc)

    def _sync_changed(self) -> None:
        self.call_from_thread(self._refresh_all)

    # -- actions ------------------------------------------------------------

    def action_switch_view(self, view: str) -> None:
        if self._modal_open():
            return
        self.view = View(view)
        self.sidebar_open = False
        self.selected_row = None
        self._refresh_all()

    def action_toggle_sidebar(self) -> None:
        if self._modal_open():
            return
        self.sidebar_open = not self.sidebar_open
        self._refresh_side_panel()

    def action_refresh(self) -> None:
        if self._modal_open():
            return
        self.refresh_orders()

    def action_move_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        orders = self._visible_orders()
        if not orders:
            return

        position = self._selected_position(orders)
        if position is None:
            position = 0 if delta > 0 else len(orders) - 1
        else:
            position = (position + delta) % len(orders)
        self.selected_row = orders[position].row_index
        self._refresh_orders()

    def action_confirm_selected(self) -> None:
        if self._modal_open() or self.view is not View.MAIN:
            return
        order = self._selected_order()
        if order is None or order.status is not OrderStatus.ACTIVE:
            return
        self.run_order_action(MODE_CONFIRM, order)

    def action_delete_selected(self) -> None:
        if self._modal_open() or self.view is not View.MAIN:
            return
        order = self._selected_order()
        if order is None or order.status is not OrderStatus.ACTIVE:
            return
        self.show_dialog(
            DELETE_PROMPT_TITLE,
            DELETE_PROMPT_MESSAGE,
            on_confirm=lambda: self.run_order_action(MODE_SOFT_DELETE, order),
            cancellable=True,
        )

    def action_restore_selected(self) -> None:
        if self._modal_open() or self.view is not View.HISTORY:
            return
        order = self._selected_order()
        if order is None or order.status is not OrderStatus.DELETED:
            return
        self.run_order_action(MODE_RESTORE, order)

    # -- dialogs ------------------------------------------------------------

    def show_dialog(
        self,
        title: str,
        message: str,
        on_confirm: Callable[[], object] | None = None,
        cancellable: bool = False,
    ) -> None:
        """Show a blocking dialog, replacing any dialog already open."""
        if isinstance(self.screen, DialogModal):
            self.pop_screen()

        def _resolved(confirmed: bool | None) -> None:
            if confirmed and on_confirm is not None:
                on_confirm()

        self.push_screen(DialogModal(title, message, cancellable=cancellable), _resolved)

    def _show_error(self, exc: DashboardError) -> None:
        title = ERROR_TITLES_BY_OPERATION.get(exc.operation, ERROR_TITLES_BY_OPERATION[MODE_FETCH])
        template = FETCH_ERROR_MESSAGE if exc.operation == MODE_FETCH else ACTION_ERROR_MESSAGE
        self.debug_log.write(f"show_error operation={exc.operation} error={exc}")
        self.show_dialog(title, template.format(error=exc))

    def _modal_open(self) -> bool:
        return isinstance(self.screen, DialogModal)

    # -- rendering ----------------------------------------------------------

    def _visible_orders(self) -> list[Order]:
        if self.view is View.MAIN:
            return self.order_sync.active
        if self.view is View.HISTORY:
            return self.order_sync.historical
        return []

    def _selected_position(self, orders: list[Order]) -> int | None:
        if self.selected_row is None:
            return None
        for idx, order in enumerate(orders):
            if order.row_index == self.selected_row:
                return idx
        return None

    def _selected_order(self) -> Order | None:
        orders = self._visible_orders()
        position = self._selected_position(orders)
        if position is None:
            return None
        return orders[position]

    def _refresh_all(self) -> None:
        self._refresh_side_panel()
        self._refresh_top_bar()
        self._refresh_orders()

    def _refresh_side_panel(self) -> None:
        try:
            panel = self.query_one("#side-panel", Vertical)
            nav = self.query_one("#nav-list", Static)
        except NoMatches:
            return
        panel.display = self.sidebar_open

        lines = Text()
        for idx, view in enumerate(View):
            if idx > 0:
                lines.append("\n")
            pointer = "➤ " if view is self.view else "  "
            lines.append(f"{pointer}{_NAV_KEYS[view]} {NAV_LABELS[view.value]}")
        nav.update(lines)

    def _refresh_top_bar(self) -> None:
        try:
            title = self.query_one("#view-title", Static)
            badge = self.query_one("#revenue-badge", RevenueBadge)
        except NoMatches:
            return
        title.update(VIEW_TITLES[self.view.value])
        badge.update(format_revenue_badge(self.order_sync.today_revenue))

    def _refresh_orders(self) -> None:
        try:
            orders_widget = self.query_one("#orders-list", Static)
        except NoMatches:
            return

        if self.view is View.REVENUE:
            orders_widget.update(self._revenue_placeholder())
            return

        orders = self._visible_orders()
        if not orders:
            self.selected_row = None
            if self.order_sync.loading:
                orders_widget.update(LOADING_TEXT)
            elif self.view is View.MAIN:
                orders_widget.update(EMPTY_ACTIVE_TEXT)
            else:
                orders_widget.update(EMPTY_HISTORY_TEXT)
            return

        # Drop the selection once its row has left this list.
        position = self._selected_position(orders)
        if position is None:
            self.selected_row = None

        visible_cards = max(1, self._visible_rows(orders_widget) // 5)
        start, end = self._window_bounds(len(orders), visible_cards, position)

        lines = Text()
        if self.order_sync.loading:
            lines.append(f"{LOADING_TEXT}\n", style="dim")
        lines.append_text(format_order_list(orders, position, start, end))
        orders_widget.update(lines)

    def _revenue_placeholder(self) -> Text:
        text = Text()
        text.append(f"{MONTHLY_REVENUE_CAPTION}\n", style="dim")
        text.append(f"{MONTHLY_REVENUE_UNAVAILABLE}\n\n", style="bold #1d4ed8")
        text.append(f"{DAILY_CHART_CAPTION}\n", style="bold")
        text.append(DAILY_CHART_UNAVAILABLE, style="dim")
        return text

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 40
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)
