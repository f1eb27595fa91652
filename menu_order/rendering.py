"""Rendering helpers for list panes and summaries."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from menu_order.cart import OrderCart
from menu_order.models import MenuItem, OrderRecord, Profile

POINTER = "➤ "
NO_POINTER = "  "


def format_price(amount: int) -> str:
    """Format whole rupiah with dot thousands separators, e.g. ``Rp 10.000``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")


def format_date(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    """Return the [start, end) slice of a list that fits ``rows`` lines around the selection."""
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


def format_menu_row(item: MenuItem, quantity: int, selected: bool) -> Text:
    """Render one menu row with its price and the quantity already in the cart."""
    text = Text()
    text.append(POINTER if selected else NO_POINTER)
    text.append(item.name, style="bold" if selected else "")
    text.append(f"  {format_price(item.price)}", style="dim")
    if quantity:
        text.append(f"  x{quantity}", style="bold #0b1f0f on #5fbf72")
    return text


def format_list_window(rows: list[Text], selected: int | None, visible_rows: int) -> Text:
    """Join pre-rendered rows, keeping the selection in view with ⋮ markers."""
    start, end = window_bounds(len(rows), visible_rows, selected)

    lines = Text()
    if start > 0:
        lines.append("⋮\n", style="dim")

    for idx in range(start, end):
        if idx > start:
            lines.append("\n")
        lines.append_text(rows[idx])

    if end < len(rows):
        lines.append("\n⋮", style="dim")
    return lines


def format_cart(cart: OrderCart) -> Text:
    """Render the cart lines and the order total."""
    text = Text()
    if cart.is_empty:
        text.append("(cart is empty)", style="dim")
        return text

    for idx, line in enumerate(cart.lines):
        if idx > 0:
            text.append("\n")
        text.append(f"{line.item.name} (x{line.quantity})")
        text.append(f"  {format_price(line.total_price)}", style="dim")

    text.append("\n\n")
    text.append("Total: ", style="bold")
    text.append(format_price(cart.compute_total()), style="bold #5fbf72")
    return text


def format_order_record(order: OrderRecord) -> Text:
    text = Text()
    text.append(f"Order #{order.order_number}", style="bold")
    for line in order.lines:
        text.append(f"\n  {line.name} (x{line.quantity})")
        text.append(f"  {format_price(line.total_price)}", style="dim")
    text.append("\n  Total: ")
    text.append(format_price(order.total_amount), style="bold #5fbf72")
    return text


def format_profile(profile: Profile) -> Text:
    text = Text()
    text.append(profile.username, style="bold")
    text.append(f"\n{profile.email}")
    text.append("\n\nAvatar: ", style="dim")
    text.append(profile.avatar or "(none)")
    text.append("\nMember since: ", style="dim")
    text.append(format_date(profile.created_at))
    return text
