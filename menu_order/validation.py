"""Client-side form validation."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from menu_order.errors import ValidationError

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def validate_login(username: str, password: str) -> tuple[str, str]:
    """Return trimmed login credentials or raise when one is missing."""
    username = username.strip()
    if not username or not password:
        raise ValidationError("Username and password are required.")
    return (username, password)


def validate_registration(username: str, email: str, password: str) -> tuple[str, str, str]:
    """Return trimmed registration fields or raise on missing/malformed input."""
    username = username.strip()
    email = email.strip()
    if not username or not email or not password:
        raise ValidationError("All fields are required.")
    if not _EMAIL_RE.search(email):
        raise ValidationError("Please enter a valid email address.")
    return (username, email, password)


def parse_price(value: object) -> int:
    """Parse a price into whole currency units without going through float."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid price: {value!r}")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid price: {value!r}") from exc

    if not amount.is_finite() or amount != amount.to_integral_value():
        raise ValidationError("Price must be a whole amount.")
    if amount < 0:
        raise ValidationError("Price cannot be negative.")
    return int(amount)


def validate_menu_form(name: str, price_text: str) -> tuple[str, int]:
    """Validate the add/edit menu form."""
    name = name.strip()
    price_text = price_text.strip()
    if not name or not price_text:
        raise ValidationError("Please fill in both fields.")
    return (name, parse_price(price_text))
