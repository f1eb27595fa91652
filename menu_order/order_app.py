"""Main Textual app class."""

from __future__ import annotations

import logging

from textual.app import App
from textual.screen import Screen

from menu_order.api import ApiClient
from menu_order.auth import AuthController, AuthState
from menu_order.config import POLL_INTERVAL_SECONDS
from menu_order.errors import AuthenticationError, MenuOrderError
from menu_order.home_screen import HomeScreen
from menu_order.login_screen import LoginScreen
from menu_order.menu_screen import MenuScreen
from menu_order.orders_screen import OrdersScreen
from menu_order.profile_screen import ProfileScreen
from menu_order.session import SessionStore

logger = logging.getLogger(__name__)

SECTIONS: dict[str, type[Screen]] = {
    "home": HomeScreen,
    "menu": MenuScreen,
    "orders": OrdersScreen,
    "profile": ProfileScreen,
}


class MenuOrderApp(App):
    """A Textual client for browsing the menu, ordering and managing an account."""

    TITLE = "Menu Order"
    SUB_TITLE = "Login"

    BINDINGS = [
        ("f1", "show_section('home')", "Home"),
        ("f2", "show_section('menu')", "Menu"),
        ("f3", "show_section('orders')", "Orders"),
        ("f4", "show_section('profile')", "Profile"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        api: ApiClient | None = None,
        session_store: SessionStore | None = None,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        super().__init__()
        self.api = api or ApiClient()
        self.session_store = session_store or SessionStore()
        self.auth = AuthController(self.session_store)
        self.poll_interval = poll_interval

    def on_mount(self) -> None:
        state = self.auth.restore()
        logger.info("Starting %s", state.value)
        if state is AuthState.AUTHENTICATED:
            self._show(self._build_section("home"))
        else:
            self._show(self._build_login())

    async def on_unmount(self) -> None:
        await self.api.aclose()

    def handle_login(self, token: str) -> None:
        self.auth.login(token)
        self.notify("Login successful!", title="Login")
        self._show(self._build_section("home"))

    def handle_logout(self) -> None:
        self.auth.logout()
        self._show(self._build_login())

    def handle_session_lost(self, message: str) -> None:
        """Fall back to the login screen after the token stopped being usable."""
        self.auth.expire()
        if isinstance(self.screen, LoginScreen):
            return
        self.notify(message, title="Session", severity="warning")
        self._show(self._build_login())

    def report_error(self, exc: MenuOrderError) -> None:
        """Surface a failure as a notification; auth failures also sign out."""
        if isinstance(exc, AuthenticationError):
            self.handle_session_lost(exc.message)
            return
        self.notify(exc.message, title="Error", severity="error")

    def action_show_section(self, name: str) -> None:
        if self.auth.state is not AuthState.AUTHENTICATED:
            return
        self.show_section(name)

    def show_section(self, name: str) -> None:
        if isinstance(self.screen, SECTIONS[name]):
            return
        self._show(self._build_section(name))

    def _build_login(self) -> LoginScreen:
        return LoginScreen(self.api, on_login=self.handle_login)

    def _build_section(self, name: str) -> Screen:
        if name == "home":
            return HomeScreen(self.api, self.auth, poll_interval=self.poll_interval)
        if name == "menu":
            return MenuScreen(self.api, self.auth)
        if name == "orders":
            return OrdersScreen(self.api, self.auth, poll_interval=self.poll_interval)
        if name == "profile":
            return ProfileScreen(self.api, self.auth, on_logout=self.handle_logout)
        raise ValueError(f"Unknown section: {name}")

    def _show(self, screen: Screen) -> None:
        # Keep one screen above the default one; modals and pushed forms go first.
        while len(self.screen_stack) > 2:
            self.pop_screen()
        if len(self.screen_stack) > 1:
            self.switch_screen(screen)
        else:
            self.push_screen(screen)
