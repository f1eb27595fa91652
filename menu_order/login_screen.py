"""Login screen."""

from __future__ import annotations

from typing import Callable

from textual import work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Button, Input, Static

from menu_order.api import ApiClient
from menu_order.errors import ApiError, ValidationError
from menu_order.register_screen import RegisterScreen
from menu_order.validation import validate_login


class LoginScreen(Screen[None]):
    """Username/password form; hands the issued token to ``on_login``."""

    CSS = """
    LoginScreen {
        align: center middle;
    }

    #login-dialog {
        width: 56;
        height: auto;
        border: round $primary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #login-dialog Input {
        margin-bottom: 1;
    }

    #login-buttons {
        height: auto;
    }

    #login-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [("ctrl+r", "open_register", "Register")]

    def __init__(self, api: ApiClient, on_login: Callable[[str], None]) -> None:
        super().__init__()
        self.api = api
        self.on_login = on_login

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Login", id="login-title")
            yield Input(placeholder="Username", id="login-username")
            yield Input(placeholder="Password", password=True, id="login-password")
            with Horizontal(id="login-buttons"):
                yield Button("Login", id="login-submit", variant="primary")
                yield Button("Register", id="login-register")
            yield Static("Don't have an account? Ctrl+R to register.", id="login-help")

    def on_mount(self) -> None:
        self.app.sub_title = "Login"
        self.query_one("#login-username", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "login-username":
            self.query_one("#login-password", Input).focus()
            return
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "login-submit":
            self._submit()
        elif event.button.id == "login-register":
            self.action_open_register()

    def action_open_register(self) -> None:
        self.app.push_screen(RegisterScreen(self.api))

    def _submit(self) -> None:
        try:
            username, password = validate_login(
                self.query_one("#login-username", Input).value,
                self.query_one("#login-password", Input).value,
            )
        except ValidationError as exc:
            self.notify(exc.message, title="Login", severity="error")
            return
        self._login(username, password)

    @work(exclusive=True, group="login")
    async def _login(self, username: str, password: str) -> None:
        try:
            token = await self.api.login(username, password)
        except ApiError as exc:
            self.notify(exc.message, title="Login failed", severity="error")
            return
        self.on_login(token)
