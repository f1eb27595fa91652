"""Domain models for menu-order."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from menu_order.validation import parse_price


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp, treating naive values as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class MenuItem:
    """A menu entry as published by the API."""

    menu_id: str
    name: str
    price: int

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> MenuItem:
        menu_id = raw.get("_id") or raw.get("id")
        if not menu_id:
            raise ValueError(f"Menu item without id: {raw!r}")
        return cls(menu_id=str(menu_id), name=str(raw.get("name", "")), price=parse_price(raw.get("price")))


@dataclass
class CartLine:
    """One menu item and its selected quantity."""

    item: MenuItem
    quantity: int = 1

    @property
    def total_price(self) -> int:
        return self.item.price * self.quantity


@dataclass(frozen=True)
class OrderPayloadLine:
    menu_id: str
    name: str
    price: int
    quantity: int
    total_price: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "menuId": self.menu_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "totalPrice": self.total_price,
        }


@dataclass(frozen=True)
class OrderPayload:
    """Server-bound snapshot of a cart at submission time."""

    items: tuple[OrderPayloadLine, ...]
    total_amount: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [line.to_dict() for line in self.items],
            "totalAmount": self.total_amount,
        }


@dataclass(frozen=True)
class OrderRecordLine:
    name: str
    quantity: int
    total_price: int


@dataclass(frozen=True)
class OrderRecord:
    """A submitted order as listed by the orders endpoint."""

    order_number: str
    lines: list[OrderRecordLine] = field(default_factory=list)
    total_amount: int = 0

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> OrderRecord:
        lines = [
            OrderRecordLine(
                name=str(line.get("name", "")),
                quantity=int(line.get("quantity", 0)),
                total_price=parse_price(line.get("totalPrice", 0)),
            )
            for line in raw.get("items") or []
        ]
        return cls(
            order_number=str(raw.get("orderNumber", "")),
            lines=lines,
            total_amount=parse_price(raw.get("totalAmount", 0)),
        )


@dataclass(frozen=True)
class Profile:
    """The signed-in user's profile."""

    username: str
    email: str
    avatar: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Profile:
        return cls(
            username=str(raw.get("username", "")),
            email=str(raw.get("email", "")),
            avatar=raw.get("avatar") or None,
            created_at=parse_timestamp(raw.get("createdAt")),
        )


@dataclass(frozen=True)
class Session:
    """Locally stored credential with a client-side expiry."""

    token: str
    expiry: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expiry <= now
