"""HTTP collaborators for the remote Lunches API.

Endpoints (JSON, bearer token):
    GET  {base}/menus?startDate=&endDate=&company=
    GET  {base}/users?fullname=&company=        -> list of users
    POST {base}/users
    GET  {base}/orders?userId=&shipmentDate=    -> list of orders
    POST {base}/orders
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from .errors import LunchesError, RemoteSyncError, UserResolutionError
from .menu import Menu
from .records import OrderRecord, User

log = logging.getLogger(__name__)


class ApiClient:
    def __init__(
        self,
        base_uri: str,
        access_token: str = "",
        company: str | None = None,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.base_uri = base_uri.rstrip("/")
        self.company = company
        self.timeout = timeout
        self.session = session or requests.Session()
        if access_token:
            self.session.headers["Authorization"] = f"Bearer {access_token}"
        self.session.headers.setdefault("Accept", "application/json")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_uri}/{path.lstrip('/')}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise RemoteSyncError(f"{method} {url} failed: {e}") from e
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteSyncError(f"{method} {url} returned invalid JSON") from e

    def scoped_params(self, params: dict[str, Any]) -> dict[str, Any]:
        if self.company:
            params["company"] = self.company
        return params


def _first(payload: Any) -> Any | None:
    if isinstance(payload, list):
        return payload[0] if payload else None
    return payload or None


class ApiMenuService:
    def __init__(self, client: ApiClient):
        self.client = client

    def find_between(self, start: date, end: date) -> list[Menu]:
        payload = self.client.get(
            "menus", self.client.scoped_params({"startDate": start.isoformat(), "endDate": end.isoformat()})
        )
        return [Menu.from_dict(m) for m in payload or []]


class ApiUserDirectory:
    def __init__(self, client: ApiClient):
        self.client = client

    def find_one(self, name: str) -> User | None:
        try:
            found = _first(self.client.get("users", self.client.scoped_params({"fullname": name})))
        except LunchesError as e:
            raise UserResolutionError(f"User {name} lookup failed: {e}") from e
        return User.from_dict(found) if found else None

    def create(self, name: str, address: str | None) -> User:
        payload = {"fullname": name, "address": address, "company": self.client.company}
        try:
            created = self.client.post("users", payload)
        except LunchesError as e:
            raise UserResolutionError(f"User {name} could not be created: {e}") from e
        if not created:
            raise UserResolutionError(f"User {name} could not be created: empty response")
        return User.from_dict(created)


class ApiOrderStore:
    def __init__(self, client: ApiClient):
        self.client = client

    def find_one(self, record: OrderRecord) -> Any | None:
        return _first(
            self.client.get("orders", {"userId": record.user_id, "shipmentDate": record.date_iso()})
        )

    def create(self, record: OrderRecord) -> Any:
        log.debug("POST order %s", record)
        return self.client.post("orders", record.to_payload())


__all__ = ["ApiClient", "ApiMenuService", "ApiUserDirectory", "ApiOrderStore"]
