"""Add/edit menu item modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from menu_order.errors import ValidationError
from menu_order.models import MenuItem
from menu_order.validation import validate_menu_form


class MenuFormModal(ModalScreen[tuple[str, int] | None]):
    """Prompt for a menu name and price; dismisses with ``(name, price)`` or None."""

    CSS = """
    MenuFormModal {
        align: center middle;
        background: $background 60%;
    }

    #menu-form-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #menu-form-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #menu-form-dialog Input {
        margin-bottom: 1;
    }

    #menu-form-buttons {
        height: auto;
    }

    #menu-form-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, item: MenuItem | None = None) -> None:
        super().__init__()
        self.item = item

    def compose(self) -> ComposeResult:
        editing = self.item is not None
        with Container(id="menu-form-dialog"):
            yield Static("Edit Menu" if editing else "Add Menu", id="menu-form-title")
            yield Input(value=self.item.name if editing else "", placeholder="Menu Name", id="menu-form-name")
            yield Input(value=str(self.item.price) if editing else "", placeholder="Price", id="menu-form-price")
            yield Static(id="menu-form-error")
            with Horizontal(id="menu-form-buttons"):
                yield Button("Update Menu" if editing else "Add Menu", id="menu-form-save", variant="primary")
                yield Button("Cancel", id="menu-form-cancel")

    def on_mount(self) -> None:
        self.query_one("#menu-form-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "menu-form-name":
            self.query_one("#menu-form-price", Input).focus()
            return
        self._confirm()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "menu-form-save":
            self._confirm()
        elif event.button.id == "menu-form-cancel":
            self.action_cancel()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _confirm(self) -> None:
        try:
            draft = validate_menu_form(
                self.query_one("#menu-form-name", Input).value,
                self.query_one("#menu-form-price", Input).value,
            )
        except ValidationError as exc:
            self.query_one("#menu-form-error", Static).update(exc.message)
            return
        self.dismiss(draft)
