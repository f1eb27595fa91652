"""In-memory order cart for the home screen."""

from __future__ import annotations

from typing import Iterator

from menu_order.models import CartLine, MenuItem, OrderPayload, OrderPayloadLine


class OrderCart:
    """Selected menu lines in the order they were first added.

    Every line present has quantity >= 1 and there is at most one line per
    menu id. Prices are whole currency units so totals are exact integers.
    """

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_item(self, item: MenuItem) -> int:
        """Add one unit of the item and return its new quantity."""
        line = self._lines.get(item.menu_id)
        if line is None:
            line = CartLine(item=item, quantity=1)
            self._lines[item.menu_id] = line
        else:
            line.quantity += 1
        return line.quantity

    def remove_item(self, item: MenuItem) -> int:
        """Remove one unit of the item and return what is left (0 when gone)."""
        line = self._lines.get(item.menu_id)
        if line is None:
            return 0
        if line.quantity > 1:
            line.quantity -= 1
            return line.quantity
        del self._lines[item.menu_id]
        return 0

    def quantity_of(self, menu_id: str) -> int:
        line = self._lines.get(menu_id)
        if line is None:
            return 0
        return line.quantity

    def compute_total(self) -> int:
        return sum(line.total_price for line in self._lines.values())

    def to_order_payload(self) -> OrderPayload:
        """Build the order submission body from the current lines."""
        items = tuple(
            OrderPayloadLine(
                menu_id=line.item.menu_id,
                name=line.item.name,
                price=line.item.price,
                quantity=line.quantity,
                total_price=line.total_price,
            )
            for line in self._lines.values()
        )
        return OrderPayload(items=items, total_amount=sum(line.total_price for line in items))

    def retain(self, menu_ids: set[str]) -> list[CartLine]:
        """Drop lines whose menu id is not in ``menu_ids`` and return them."""
        dropped = [line for key, line in self._lines.items() if key not in menu_ids]
        for line in dropped:
            del self._lines[line.item.menu_id]
        return dropped

    def clear(self) -> None:
        self._lines.clear()
