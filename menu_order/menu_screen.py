"""Menu administration screen: search, add, edit and delete menu items."""

from __future__ import annotations

from rich.text import Text
from textual import work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Header, Static

from menu_order.api import ApiClient
from menu_order.auth import AuthController
from menu_order.errors import ApiError
from menu_order.menu_form_modal import MenuFormModal
from menu_order.models import MenuItem
from menu_order.rendering import format_list_window, format_menu_row


def filter_menu(items: list[MenuItem], query: str) -> list[MenuItem]:
    """Match on a case-insensitive name substring or on the price digits."""
    if not query:
        return list(items)
    q = query.lower()
    return [item for item in items if q in item.name.lower() or query in str(item.price)]


class MenuScreen(Screen[None]):
    """Fetches the menu once and edits it in place as the server confirms changes."""

    CSS = """
    #menu-admin-pane {
        height: 1fr;
        border: round $primary;
        padding: 1;
    }

    #menu-search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #menu-admin-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("backspace", "backspace_query", "Delete query char"),
        ("enter", "finish_search", "Done"),
        ("escape", "cancel_search", "Clear search"),
    ]

    def __init__(self, api: ApiClient, auth: AuthController) -> None:
        super().__init__()
        self.api = api
        self.auth = auth
        self.menus: list[MenuItem] = []
        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self.loaded = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="menu-admin-pane"):
            yield Static(id="menu-search-bar")
            yield Static("Loading menu...", id="menu-admin-list")

    def on_mount(self) -> None:
        self.app.sub_title = "Menu"
        self._refresh_all()
        self.load_menus()

    def on_key(self, event: Key) -> None:
        if not event.is_printable or not event.character:
            return

        if self.input_state == "active":
            self.search_text += event.character
            self.selected_index = 0
            self._refresh_all()
            event.stop()
            return

        key = event.character.lower()
        if key == "j":
            self.action_move_cursor(1)
        elif key == "k":
            self.action_move_cursor(-1)
        elif key == "/":
            self.input_state = "active"
            self._refresh_all()
        elif key == "n":
            self.app.push_screen(MenuFormModal(), self._on_add_closed)
        elif key == "e":
            item = self._selected_item()
            if item is not None:
                self.app.push_screen(MenuFormModal(item), lambda result: self._on_edit_closed(item, result))
        elif key == "d":
            item = self._selected_item()
            if item is not None:
                self._delete_menu(item)
        elif key == "r":
            self.load_menus()
        else:
            return
        event.stop()

    def action_move_cursor(self, delta: int) -> None:
        results = self._filtered()
        if not results:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_list()

    def action_backspace_query(self) -> None:
        if self.input_state != "active" or not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_all()

    def action_finish_search(self) -> None:
        if self.input_state != "active":
            return
        self.input_state = "normal"
        self._refresh_all()

    def action_cancel_search(self) -> None:
        if self.input_state == "normal" and not self.search_text:
            return
        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_all()

    @work(exclusive=True, group="menu-load")
    async def load_menus(self) -> None:
        try:
            token = self.auth.require_token()
            items = await self.api.fetch_menu(token)
        except ApiError as exc:
            self.app.report_error(exc)
            return
        self.menus = items
        self.loaded = True
        self._refresh_all()

    def _on_add_closed(self, result: tuple[str, int] | None) -> None:
        if result is not None:
            self._create_menu(*result)

    def _on_edit_closed(self, item: MenuItem, result: tuple[str, int] | None) -> None:
        if result is not None:
            self._update_menu(item, *result)

    @work(group="menu-write")
    async def _create_menu(self, name: str, price: int) -> None:
        try:
            created = await self.api.create_menu_item(self.auth.require_token(), name, price)
        except ApiError as exc:
            self.app.report_error(exc)
            return
        self.menus.insert(0, created)
        self.selected_index = 0
        self.notify(f"Added {created.name}.", title="Menu")
        self._refresh_all()

    @work(group="menu-write")
    async def _update_menu(self, item: MenuItem, name: str, price: int) -> None:
        try:
            updated = await self.api.update_menu_item(self.auth.require_token(), item.menu_id, name, price)
        except ApiError as exc:
            self.app.report_error(exc)
            return
        self.menus = [updated if menu.menu_id == item.menu_id else menu for menu in self.menus]
        self.notify(f"Updated {updated.name}.", title="Menu")
        self._refresh_all()

    @work(group="menu-write")
    async def _delete_menu(self, item: MenuItem) -> None:
        try:
            await self.api.delete_menu_item(self.auth.require_token(), item.menu_id)
        except ApiError as exc:
            self.app.report_error(exc)
            return
        self.menus = [menu for menu in self.menus if menu.menu_id != item.menu_id]
        self.notify(f"Deleted {item.name}.", title="Menu")
        self._refresh_all()

    def _filtered(self) -> list[MenuItem]:
        return filter_menu(self.menus, self.search_text)

    def _selected_item(self) -> MenuItem | None:
        results = self._filtered()
        if not (0 <= self.selected_index < len(results)):
            return None
        return results[self.selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_all(self) -> None:
        self._refresh_search_bar()
        self._refresh_list()

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#menu-search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            filter_note = f"  (filter: {self.search_text})" if self.search_text else ""
            bar.update(f"/ search, N add, E edit, D delete, R reload.{filter_note}")
            return

        text = Text()
        text.append("Search", style="bold #ffffff on #2f6db5")
        text.append(f": {self.search_text}|")
        bar.update(text)

    def _refresh_list(self) -> None:
        try:
            list_widget = self.query_one("#menu-admin-list", Static)
        except NoMatches:
            return
        if not self.loaded:
            list_widget.update("Loading menu...")
            return

        results = self._filtered()
        if not results:
            list_widget.update("No results" if self.search_text else "No menu yet. Press N to add one.")
            return
        if self.selected_index >= len(results):
            self.selected_index = 0

        rows = [format_menu_row(item, 0, idx == self.selected_index) for idx, item in enumerate(results)]
        list_widget.update(format_list_window(rows, self.selected_index, self._visible_rows(list_widget)))
