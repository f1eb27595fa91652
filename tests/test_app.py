import asyncio
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from menu_order.api import ApiClient
from menu_order.home_screen import HomeScreen
from menu_order.login_screen import LoginScreen
from menu_order.models import Session
from menu_order.order_app import MenuOrderApp
from menu_order.orders_screen import OrdersScreen

MENU = [
    {"_id": "a", "name": "Nasi Goreng", "price": 10000},
    {"_id": "b", "name": "Es Teh", "price": 3000},
]


class FakeBackend:
    def __init__(self):
        self.orders = []

    def __call__(self, request):
        if request.url.path == "/api/menu":
            return httpx.Response(200, json={"data": MENU})
        if request.url.path == "/api/orders" and request.method == "POST":
            self.orders.append(json.loads(request.content))
            return httpx.Response(201, json={"data": {"orderNumber": len(self.orders)}})
        if request.url.path == "/api/orders":
            return httpx.Response(200, json={"orders": []})
        return httpx.Response(404, json={"message": "not found"})


def make_app(session_store, backend=None):
    api = ApiClient(base_url="http://orders.test/api", transport=httpx.MockTransport(backend or FakeBackend()))
    return MenuOrderApp(api=api, session_store=session_store, poll_interval=0.05)


async def wait_for(pilot, condition, attempts=40):
    for _ in range(attempts):
        if condition():
            return True
        await pilot.pause(0.05)
    return condition()


@pytest.mark.asyncio
async def test_no_session_starts_on_login(session_store):
    app = make_app(session_store)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, LoginScreen)


@pytest.mark.asyncio
async def test_expired_session_starts_on_login_and_is_discarded(session_store):
    session_store.save(Session(token="old", expiry=datetime.now(timezone.utc) - timedelta(minutes=1)))

    app = make_app(session_store)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, LoginScreen)

    assert session_store.load() is None


@pytest.mark.asyncio
async def test_valid_session_builds_and_submits_an_order(session_store):
    session_store.save(Session(token="tok", expiry=datetime.now(timezone.utc) + timedelta(days=1)))
    backend = FakeBackend()

    app = make_app(session_store, backend)
    async with app.run_test() as pilot:
        await pilot.pause()
        home = app.screen
        assert isinstance(home, HomeScreen)
        assert await wait_for(pilot, lambda: home.loaded)

        await pilot.press("l", "l")
        assert home.cart.quantity_of("a") == 2
        assert home.cart.compute_total() == 20000

        await pilot.press("ctrl+s")
        assert await wait_for(pilot, lambda: isinstance(app.screen, OrdersScreen))

    assert backend.orders == [
        {
            "items": [{"menuId": "a", "name": "Nasi Goreng", "price": 10000, "quantity": 2, "totalPrice": 20000}],
            "totalAmount": 20000,
        }
    ]
    assert home.cart.is_empty


def save_valid_session(session_store):
    session_store.save(Session(token="tok", expiry=datetime.now(timezone.utc) + timedelta(days=1)))


@pytest.mark.asyncio
async def test_menu_status_clears_after_poll_recovers(session_store):
    save_valid_session(session_store)
    menu_calls = []

    def backend(request):
        if request.url.path == "/api/menu":
            menu_calls.append(1)
            if len(menu_calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json={"data": MENU})
        return httpx.Response(404, json={"message": "not found"})

    app = make_app(session_store, backend)
    async with app.run_test() as pilot:
        await pilot.pause()
        home = app.screen
        assert isinstance(home, HomeScreen)
        assert await wait_for(pilot, lambda: home.loaded)

        assert len(menu_calls) >= 2
        assert home.status == ""


@pytest.mark.asyncio
async def test_order_in_flight_blocks_resubmit_and_keeps_cart_on_failure(session_store):
    save_valid_session(session_store)
    posts = []
    release = asyncio.Event()

    async def backend(request):
        if request.url.path == "/api/menu":
            return httpx.Response(200, json={"data": MENU})
        if request.url.path == "/api/orders" and request.method == "POST":
            posts.append(json.loads(request.content))
            await release.wait()
            return httpx.Response(500, json={"message": "Kitchen closed"})
        return httpx.Response(200, json={"orders": []})

    app = make_app(session_store, backend)
    async with app.run_test() as pilot:
        await pilot.pause()
        home = app.screen
        assert isinstance(home, HomeScreen)
        assert await wait_for(pilot, lambda: home.loaded)

        await pilot.press("l")
        await pilot.press("ctrl+s")
        assert await wait_for(pilot, lambda: len(posts) == 1)
        await pilot.press("ctrl+s", "l")

        assert home.submitting
        assert home.cart.quantity_of("a") == 1

        release.set()
        assert await wait_for(pilot, lambda: not home.submitting)

        assert len(posts) == 1
        assert home.cart.quantity_of("a") == 1
        assert app.screen is home


@pytest.mark.asyncio
async def test_rejected_token_falls_back_to_login(session_store):
    save_valid_session(session_store)

    app = make_app(session_store, lambda request: httpx.Response(401, json={"message": "Token expired"}))
    async with app.run_test() as pilot:
        await pilot.pause()
        assert await wait_for(pilot, lambda: isinstance(app.screen, LoginScreen))

    assert session_store.load() is None


@pytest.mark.asyncio
async def test_items_removed_from_menu_leave_the_cart(session_store):
    save_valid_session(session_store)
    menus = [MENU]

    def backend(request):
        if request.url.path == "/api/menu":
            return httpx.Response(200, json={"data": menus[-1]})
        return httpx.Response(404, json={"message": "not found"})

    app = make_app(session_store, backend)
    async with app.run_test() as pilot:
        await pilot.pause()
        home = app.screen
        assert isinstance(home, HomeScreen)
        assert await wait_for(pilot, lambda: home.loaded)

        await pilot.press("j", "l", "k", "l")
        assert home.cart.quantity_of("b") == 1

        menus.append(MENU[:1])
        assert await wait_for(pilot, lambda: home.cart.quantity_of("b") == 0)
        assert home.cart.quantity_of("a") == 1
        assert [item.menu_id for item in home.menu_items] == ["a"]
