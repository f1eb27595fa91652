"""Account registration screen."""

from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Button, Input, Static

from menu_order.api import ApiClient
from menu_order.errors import ApiError, ValidationError
from menu_order.validation import validate_registration


class RegisterScreen(Screen[None]):
    """Pushed over the login screen; pops back to it once the account exists."""

    CSS = """
    RegisterScreen {
        align: center middle;
    }

    #register-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #register-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #register-dialog Input {
        margin-bottom: 1;
    }

    #register-buttons {
        height: auto;
    }

    #register-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [("escape", "back", "Back to login")]

    def __init__(self, api: ApiClient) -> None:
        super().__init__()
        self.api = api

    def compose(self) -> ComposeResult:
        with Container(id="register-dialog"):
            yield Static("Register", id="register-title")
            yield Input(placeholder="Username", id="register-username")
            yield Input(placeholder="Email", id="register-email")
            yield Input(placeholder="Password", password=True, id="register-password")
            with Horizontal(id="register-buttons"):
                yield Button("Register", id="register-submit", variant="primary")
                yield Button("Back", id="register-back")
            yield Static("Already have an account? Esc to log in.", id="register-help")

    def on_mount(self) -> None:
        self.app.sub_title = "Register"
        self.query_one("#register-username", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "register-username":
            self.query_one("#register-email", Input).focus()
        elif event.input.id == "register-email":
            self.query_one("#register-password", Input).focus()
        else:
            self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "register-submit":
            self._submit()
        elif event.button.id == "register-back":
            self.action_back()

    def action_back(self) -> None:
        self.app.pop_screen()

    def _submit(self) -> None:
        try:
            fields = validate_registration(
                self.query_one("#register-username", Input).value,
                self.query_one("#register-email", Input).value,
                self.query_one("#register-password", Input).value,
            )
        except ValidationError as exc:
            self.notify(exc.message, title="Register", severity="error")
            return
        self._register(*fields)

    @work(exclusive=True, group="register")
    async def _register(self, username: str, email: str, password: str) -> None:
        try:
            await self.api.register(username, email, password)
        except ApiError as exc:
            self.notify(exc.message, title="Registration failed", severity="error")
            return
        self.app.notify("Registration successful!", title="Register")
        self.app.pop_screen()
