import pytest

from menu_order.models import MenuItem
from menu_order.session import SessionStore


@pytest.fixture()
def nasi_goreng():
    return MenuItem(menu_id="a", name="Nasi Goreng", price=10000)


@pytest.fixture()
def es_teh():
    return MenuItem(menu_id="b", name="Es Teh", price=3000)


@pytest.fixture()
def session_store(tmp_path):
    return SessionStore(tmp_path / "session.db")
