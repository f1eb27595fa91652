"""Entry point for the menu-order Textual app."""

from __future__ import annotations

from menu_order.config import setup_logging
from menu_order.order_app import MenuOrderApp


def main() -> None:
    """Run the Textual application."""
    setup_logging()
    MenuOrderApp().run()


if __name__ == "__main__":
    main()
