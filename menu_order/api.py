"""HTTP client for the ordering REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from menu_order.config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from menu_order.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    ServerError,
    ValidationError,
)
from menu_order.models import MenuItem, OrderPayload, OrderRecord, Profile

logger = logging.getLogger(__name__)

_CONNECT_FAILED = "Failed to connect to server"
_UNEXPECTED_RESPONSE = "Unexpected response from server"


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return default


def _data(body: Any) -> Any:
    if not isinstance(body, dict) or body.get("data") is None:
        raise ServerError(_UNEXPECTED_RESPONSE)
    return body["data"]


class ApiClient:
    """Async wrapper around the auth, menu, order and profile endpoints.

    The bearer token is passed on every authenticated call; the client holds
    no session state of its own.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        error_message: str,
        token: str | None = None,
        payload: dict[str, Any] | None = None,
        rejected: type[ApiError] = ServerError,
    ) -> Any:
        headers = {}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %r", method, path, exc)
            raise NetworkError(_CONNECT_FAILED) from exc

        body = _decode_body(response)
        if response.is_success:
            logger.debug("%s %s -> %s", method, path, response.status_code)
            return body

        message = _error_message(body, error_message)
        logger.info("%s %s -> %s: %s", method, path, response.status_code, message)
        if response.status_code in (401, 403):
            raise AuthenticationError(message, status_code=response.status_code)
        raise rejected(message, status_code=response.status_code)

    async def login(self, username: str, password: str) -> str:
        """Exchange credentials for a bearer token."""
        body = await self._request(
            "POST",
            "/auth/login",
            payload={"username": username, "password": password},
            error_message="User not found",
            rejected=AuthenticationError,
        )
        data = _data(body)
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise ServerError(_UNEXPECTED_RESPONSE)
        return token

    async def register(self, username: str, email: str, password: str) -> None:
        await self._request(
            "POST",
            "/auth/register",
            payload={"username": username, "email": email, "password": password},
            error_message="Registration failed.",
        )

    async def fetch_menu(self, token: str) -> list[MenuItem]:
        """Return the published menu, skipping entries that cannot be priced."""
        body = await self._request("GET", "/menu", token=token, error_message="Failed to load menu.")
        raw_items = _data(body)
        if not isinstance(raw_items, list):
            raise ServerError(_UNEXPECTED_RESPONSE)

        items: list[MenuItem] = []
        for raw in raw_items:
            try:
                items.append(MenuItem.from_api(raw))
            except (ValidationError, ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed menu item %r: %s", raw, exc)
        return items

    async def create_menu_item(self, token: str, name: str, price: int) -> MenuItem:
        body = await self._request(
            "POST",
            "/menu",
            token=token,
            payload={"name": name, "price": price},
            error_message="Error adding menu",
        )
        return self._menu_item(body)

    async def update_menu_item(self, token: str, menu_id: str, name: str, price: int) -> MenuItem:
        body = await self._request(
            "PUT",
            f"/menu/{menu_id}",
            token=token,
            payload={"name": name, "price": price},
            error_message="Error editing menu",
        )
        return self._menu_item(body)

    async def delete_menu_item(self, token: str, menu_id: str) -> None:
        await self._request("DELETE", f"/menu/{menu_id}", token=token, error_message="Error deleting menu")

    async def submit_order(self, token: str, payload: OrderPayload) -> Any:
        """Post an order; returns the server's confirmation body."""
        return await self._request(
            "POST",
            "/orders",
            token=token,
            payload=payload.to_dict(),
            error_message="Failed to create order.",
        )

    async def fetch_orders(self, token: str) -> list[OrderRecord]:
        body = await self._request("GET", "/orders", token=token, error_message="Failed to fetch orders.")
        raw_orders = body.get("orders") if isinstance(body, dict) else None
        if not raw_orders:
            return []
        try:
            return [OrderRecord.from_api(raw) for raw in raw_orders]
        except (ValidationError, ValueError, TypeError, AttributeError) as exc:
            raise ServerError(_UNEXPECTED_RESPONSE) from exc

    async def fetch_profile(self, token: str) -> Profile:
        body = await self._request("GET", "/profile", token=token, error_message="Failed to fetch profile")
        data = _data(body)
        if not isinstance(data, dict):
            raise ServerError(_UNEXPECTED_RESPONSE)
        return Profile.from_api(data)

    @staticmethod
    def _menu_item(body: Any) -> MenuItem:
        data = _data(body)
        try:
            return MenuItem.from_api(data)
        except (ValidationError, ValueError, AttributeError) as exc:
            raise ServerError(_UNEXPECTED_RESPONSE) from exc
