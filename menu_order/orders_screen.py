"""Order history screen."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Header, Static

from menu_order.api import ApiClient
from menu_order.auth import AuthController
from menu_order.config import POLL_INTERVAL_SECONDS
from menu_order.errors import ApiError, AuthenticationError
from menu_order.models import OrderRecord
from menu_order.polling import PeriodicTask
from menu_order.rendering import format_order_record

logger = logging.getLogger(__name__)


class OrdersScreen(Screen[None]):
    """Lists the signed-in user's orders, refreshed while the screen is open."""

    CSS = """
    #orders-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #orders-body {
        padding: 0 1;
    }

    #orders-help {
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("escape", "back_to_menu", "Back to menu"),
        ("b", "back_to_menu", "Back to menu"),
    ]

    def __init__(self, api: ApiClient, auth: AuthController, poll_interval: float = POLL_INTERVAL_SECONDS) -> None:
        super().__init__()
        self.api = api
        self.auth = auth
        self.orders: list[OrderRecord] = []
        self.loading = True
        self._poller = PeriodicTask(self.refresh_orders, interval=poll_interval, name="orders-poll")

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="orders-pane"):
            yield Static("Loading orders...", id="orders-body")
        yield Static("B / Esc back to menu. F1-F4 switch.", id="orders-help")

    def on_mount(self) -> None:
        self.app.sub_title = "Orders"
        self._poller.start()

    def on_unmount(self) -> None:
        self._poller.stop()

    async def refresh_orders(self) -> None:
        try:
            token = self.auth.require_token()
            orders = await self.api.fetch_orders(token)
        except AuthenticationError as exc:
            self._poller.stop()
            self.app.report_error(exc)
            return
        except ApiError as exc:
            logger.warning("Order refresh failed: %s", exc)
            self.loading = False
            self._refresh_body()
            self.app.report_error(exc)
            return

        self.orders = orders
        self.loading = False
        self._refresh_body()

    def action_back_to_menu(self) -> None:
        self.app.show_section("home")

    def _refresh_body(self) -> None:
        try:
            body = self.query_one("#orders-body", Static)
        except NoMatches:
            return
        if self.loading:
            body.update("Loading orders...")
            return
        if not self.orders:
            body.update("No orders for this user.")
            return

        text = Text()
        for idx, order in enumerate(self.orders):
            if idx > 0:
                text.append("\n\n")
            text.append_text(format_order_record(order))
        body.update(text)
