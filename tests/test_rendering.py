from menu_order.cart import OrderCart
from menu_order.menu_screen import filter_menu
from menu_order.models import MenuItem, OrderRecord, OrderRecordLine
from menu_order.rendering import (
    format_cart,
    format_list_window,
    format_menu_row,
    format_order_record,
    format_price,
    window_bounds,
)
from rich.text import Text


def test_format_price_uses_dot_thousands():
    assert format_price(0) == "Rp 0"
    assert format_price(10000) == "Rp 10.000"
    assert format_price(1250000) == "Rp 1.250.000"


def test_window_bounds_centres_selection():
    assert window_bounds(0, 5, None) == (0, 0)
    assert window_bounds(3, 5, 2) == (0, 3)
    assert window_bounds(20, 5, 10) == (8, 13)
    assert window_bounds(20, 5, 19) == (15, 20)
    assert window_bounds(20, 5, None) == (0, 5)


def test_list_window_marks_hidden_rows():
    rows = [Text(f"row {idx}") for idx in range(10)]
    rendered = format_list_window(rows, 5, 3).plain

    assert rendered.startswith("⋮\n")
    assert rendered.endswith("\n⋮")
    assert "row 5" in rendered
    assert "row 0" not in rendered


def test_menu_row_shows_quantity_only_when_in_cart(nasi_goreng):
    assert format_menu_row(nasi_goreng, 0, False).plain == "  Nasi Goreng  Rp 10.000"
    assert format_menu_row(nasi_goreng, 2, True).plain == "➤ Nasi Goreng  Rp 10.000  x2"


def test_cart_summary_includes_total(nasi_goreng, es_teh):
    cart = OrderCart()
    assert format_cart(cart).plain == "(cart is empty)"

    cart.add_item(nasi_goreng)
    cart.add_item(es_teh)
    cart.add_item(es_teh)
    plain = format_cart(cart).plain

    assert "Nasi Goreng (x1)  Rp 10.000" in plain
    assert "Es Teh (x2)  Rp 6.000" in plain
    assert plain.endswith("Total: Rp 16.000")


def test_order_record_block():
    order = OrderRecord(order_number="7", lines=[OrderRecordLine("Bakso", 2, 30000)], total_amount=30000)
    assert format_order_record(order).plain == "Order #7\n  Bakso (x2)  Rp 30.000\n  Total: Rp 30.000"


def test_filter_menu_by_name_or_price():
    items = [
        MenuItem(menu_id="a", name="Nasi Goreng", price=10000),
        MenuItem(menu_id="b", name="Es Teh", price=3000),
    ]

    assert filter_menu(items, "") == items
    assert filter_menu(items, "GORENG") == items[:1]
    assert filter_menu(items, "300") == items[1:]
    assert filter_menu(items, "sate") == []
