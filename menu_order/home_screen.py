"""Home screen: browse the menu and build an order."""

from __future__ import annotations

import logging

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Header, Static

from menu_order.api import ApiClient
from menu_order.auth import AuthController
from menu_order.cart import OrderCart
from menu_order.config import POLL_INTERVAL_SECONDS
from menu_order.errors import ApiError, AuthenticationError
from menu_order.models import MenuItem, OrderPayload
from menu_order.polling import PeriodicTask
from menu_order.rendering import format_cart, format_list_window, format_menu_row

logger = logging.getLogger(__name__)


class HomeScreen(Screen[None]):
    """Menu list with per-item quantities next to the cart being built."""

    CSS = """
    #home-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-summary {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #home-status {
        margin-top: 1;
        color: $text-muted;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("j", "move_cursor(1)", "Next"),
        ("right", "add_selected", "Add"),
        ("plus", "add_selected", "Add"),
        ("l", "add_selected", "Add"),
        ("left", "remove_selected", "Remove"),
        ("minus", "remove_selected", "Remove"),
        ("h", "remove_selected", "Remove"),
        ("c", "clear_cart", "Clear cart"),
        Binding("ctrl+s", "submit_order", "Submit order", priority=True),
    ]

    def __init__(self, api: ApiClient, auth: AuthController, poll_interval: float = POLL_INTERVAL_SECONDS) -> None:
        super().__init__()
        self.api = api
        self.auth = auth
        self.menu_items: list[MenuItem] = []
        self.cart = OrderCart()
        self.selected_index = 0
        self.loaded = False
        self.submitting = False
        self.status = ""
        self._poller = PeriodicTask(self.refresh_menu, interval=poll_interval, name="menu-poll")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="home-layout"):
            with Vertical(id="menu-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static("Loading menu...", id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Your Order", classes="pane-title")
                yield Static(id="cart-summary")
                yield Static(id="home-status")

    def on_mount(self) -> None:
        self.app.sub_title = "Home"
        self._refresh_all()
        self._poller.start()

    def on_unmount(self) -> None:
        self._poller.stop()

    async def refresh_menu(self) -> None:
        """Fetch the menu; the latest successful response replaces the list."""
        try:
            token = self.auth.require_token()
            items = await self.api.fetch_menu(token)
        except AuthenticationError as exc:
            self._poller.stop()
            self.app.report_error(exc)
            return
        except ApiError as exc:
            logger.warning("Menu refresh failed: %s", exc)
            self.status = exc.message
            self._refresh_status()
            return

        self.menu_items = items
        self.loaded = True
        if self.selected_index >= len(items):
            self.selected_index = max(0, len(items) - 1)
        if not self.submitting:
            self.status = ""
            dropped = self.cart.retain({item.menu_id for item in items})
            if dropped:
                names = ", ".join(line.item.name for line in dropped)
                self.notify(f"No longer on the menu: {names}", title="Order", severity="warning")
        self._refresh_cart()
        self._refresh_status()

    def action_move_cursor(self, delta: int) -> None:
        if not self.menu_items:
            return
        self.selected_index = (self.selected_index + delta) % len(self.menu_items)
        self._refresh_menu_list()

    def action_add_selected(self) -> None:
        item = self._selected_item()
        if item is None or self._cart_locked():
            return
        self.cart.add_item(item)
        self._refresh_cart()

    def action_remove_selected(self) -> None:
        item = self._selected_item()
        if item is None or self._cart_locked():
            return
        self.cart.remove_item(item)
        self._refresh_cart()

    def action_clear_cart(self) -> None:
        if self._cart_locked():
            return
        self.cart.clear()
        self._refresh_cart()

    def action_submit_order(self) -> None:
        if self.submitting:
            self.notify("Order is already being submitted.", severity="warning")
            return
        if self.cart.is_empty:
            self.notify("Add at least one menu item first.", title="Order", severity="warning")
            return

        self.submitting = True
        self.status = "Submitting order..."
        self._refresh_status()
        self._submit_order(self.cart.to_order_payload())

    @work(group="submit-order")
    async def _submit_order(self, payload: OrderPayload) -> None:
        try:
            token = self.auth.require_token()
            await self.api.submit_order(token, payload)
        except ApiError as exc:
            self.submitting = False
            self.status = ""
            self._refresh_status()
            self.app.report_error(exc)
            return

        logger.info("Order submitted: %d lines, total %d", len(payload.items), payload.total_amount)
        self.submitting = False
        self.cart.clear()
        self.status = ""
        self._refresh_cart()
        self._refresh_status()
        self.app.notify("Order placed.", title="Order")
        self.app.show_section("orders")

    def _cart_locked(self) -> bool:
        if self.submitting:
            self.notify("Wait for the current order to finish submitting.", severity="warning")
            return True
        return False

    def _selected_item(self) -> MenuItem | None:
        if not (0 <= self.selected_index < len(self.menu_items)):
            return None
        return self.menu_items[self.selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_all(self) -> None:
        self._refresh_menu_list()
        self._refresh_cart()
        self._refresh_status()

    def _refresh_menu_list(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        if not self.loaded:
            menu_widget.update("Loading menu...")
            return
        if not self.menu_items:
            menu_widget.update("No menu available.")
            return

        rows = [
            format_menu_row(item, self.cart.quantity_of(item.menu_id), idx == self.selected_index)
            for idx, item in enumerate(self.menu_items)
        ]
        menu_widget.update(format_list_window(rows, self.selected_index, self._visible_rows(menu_widget)))

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-summary", Static)
        except NoMatches:
            return
        cart_widget.update(format_cart(self.cart))
        self._refresh_menu_list()

    def _refresh_status(self) -> None:
        try:
            status_widget = self.query_one("#home-status", Static)
        except NoMatches:
            return
        help_text = "J/K move, L/+ add, H/- remove, C clear, Ctrl+S submit. F1-F4 switch."
        status_widget.update(f"{help_text}\n{self.status}" if self.status else help_text)
