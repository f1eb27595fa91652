import random

from menu_order.cart import OrderCart
from menu_order.models import MenuItem


def test_adding_twice_tracks_quantity_and_total(nasi_goreng):
    cart = OrderCart()
    cart.add_item(MenuItem(menu_id="a", name="Nasi Goreng", price=10000))
    cart.add_item(nasi_goreng)

    assert cart.quantity_of("a") == 2
    assert cart.compute_total() == 20000


def test_same_item_n_times_is_one_line(nasi_goreng):
    cart = OrderCart()
    for _ in range(5):
        cart.add_item(nasi_goreng)

    assert len(cart) == 1
    assert cart.lines[0].quantity == 5


def test_removing_last_unit_drops_the_line(nasi_goreng):
    cart = OrderCart()
    cart.add_item(nasi_goreng)

    assert cart.remove_item(nasi_goreng) == 0
    assert cart.quantity_of("a") == 0
    assert cart.is_empty
    assert all(line.item.menu_id != "a" for line in cart)


def test_remove_decrements_and_absent_is_noop(nasi_goreng, es_teh):
    cart = OrderCart()
    cart.add_item(nasi_goreng)
    cart.add_item(nasi_goreng)

    assert cart.remove_item(nasi_goreng) == 1
    assert cart.remove_item(es_teh) == 0
    assert cart.quantity_of("b") == 0
    assert len(cart) == 1


def test_add_then_remove_restores_previous_state(nasi_goreng, es_teh):
    cart = OrderCart()
    cart.add_item(nasi_goreng)
    cart.add_item(es_teh)
    cart.add_item(es_teh)
    before = cart.to_order_payload()

    for item in (nasi_goreng, es_teh, MenuItem(menu_id="c", name="Kerupuk", price=2000)):
        cart.add_item(item)
        cart.remove_item(item)
        assert cart.to_order_payload() == before


def test_payload_preserves_insertion_order(nasi_goreng, es_teh):
    cart = OrderCart()
    cart.add_item(es_teh)
    cart.add_item(nasi_goreng)
    cart.add_item(es_teh)

    payload = cart.to_order_payload().to_dict()

    assert payload == {
        "items": [
            {"menuId": "b", "name": "Es Teh", "price": 3000, "quantity": 2, "totalPrice": 6000},
            {"menuId": "a", "name": "Nasi Goreng", "price": 10000, "quantity": 1, "totalPrice": 10000},
        ],
        "totalAmount": 16000,
    }


def test_random_sequences_keep_invariants():
    rng = random.Random(1234)
    items = [MenuItem(menu_id=str(i), name=f"Item {i}", price=rng.randint(0, 50000)) for i in range(6)]
    cart = OrderCart()
    expected = {item.menu_id: 0 for item in items}

    for _ in range(500):
        item = rng.choice(items)
        if rng.random() < 0.55:
            cart.add_item(item)
            expected[item.menu_id] += 1
        else:
            cart.remove_item(item)
            expected[item.menu_id] = max(0, expected[item.menu_id] - 1)

        for menu_id, quantity in expected.items():
            assert cart.quantity_of(menu_id) == quantity
        assert all(line.quantity >= 1 for line in cart)

        payload = cart.to_order_payload()
        assert payload.total_amount == sum(line.total_price for line in payload.items)
        assert payload.total_amount == cart.compute_total()


def test_clear_empties_cart(nasi_goreng, es_teh):
    cart = OrderCart()
    cart.add_item(nasi_goreng)
    cart.add_item(es_teh)

    cart.clear()

    assert cart.compute_total() == 0
    assert cart.to_order_payload().to_dict() == {"items": [], "totalAmount": 0}


def test_retain_drops_lines_for_items_off_the_menu(nasi_goreng, es_teh):
    cart = OrderCart()
    cart.add_item(nasi_goreng)
    cart.add_item(es_teh)
    cart.add_item(es_teh)

    dropped = cart.retain({"a"})

    assert [line.item.menu_id for line in dropped] == ["b"]
    assert cart.quantity_of("b") == 0
    assert cart.quantity_of("a") == 1
    assert cart.compute_total() == 10000
    assert cart.retain({"a"}) == []
