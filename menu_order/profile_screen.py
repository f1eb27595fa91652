"""Profile screen with logout."""

from __future__ import annotations

from typing import Callable

from textual import work
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Button, Header, Static

from menu_order.api import ApiClient
from menu_order.auth import AuthController
from menu_order.errors import ApiError
from menu_order.models import Profile
from menu_order.rendering import format_profile


class ProfileScreen(Screen[None]):
    CSS = """
    ProfileScreen {
        align: center middle;
    }

    #profile-card {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #profile-body {
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        ("r", "reload", "Reload"),
        ("ctrl+l", "logout", "Logout"),
    ]

    def __init__(self, api: ApiClient, auth: AuthController, on_logout: Callable[[], None]) -> None:
        super().__init__()
        self.api = api
        self.auth = auth
        self.on_logout = on_logout
        self.profile: Profile | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="profile-card"):
            yield Static("Loading profile...", id="profile-body")
            yield Button("Logout", id="profile-logout", variant="error")

    def on_mount(self) -> None:
        self.app.sub_title = "Profile"
        self.load_profile()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "profile-logout":
            self.action_logout()

    def action_reload(self) -> None:
        self.load_profile()

    def action_logout(self) -> None:
        self.on_logout()

    @work(exclusive=True, group="profile")
    async def load_profile(self) -> None:
        body = self.query_one("#profile-body", Static)
        try:
            profile = await self.api.fetch_profile(self.auth.require_token())
        except ApiError as exc:
            body.update("No user data available.")
            self.app.report_error(exc)
            return
        self.profile = profile
        body.update(format_profile(profile))
