"""
HTTP client for the task API.

Wraps ``httpx.Client``, unwraps the response envelope and separates two
failure classes: no response at all (``ApiConnectionError``) and a
structured error response (``ApiError``).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiConnectionError(Exception):
    """The request never produced a response (network failure, timeout)."""


class ApiError(Exception):
    """The server answered with an error envelope."""

    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _clean(params: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        cleaned[key] = value
    return cleaned


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class TaskApiClient:
    """
    Client for the task and auth endpoints.

    Usage:
        client = TaskApiClient("http://localhost:8000")
        client.login("demo@example.com", "Password123")
        page = client.list_tasks(status=0, limit=20)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.token = token

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("No response from %s %s: %s", method, path, exc)
            raise ApiConnectionError(f"Unable to reach the server: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("success", False):
            raise ApiError(
                status_code=response.status_code,
                message=body.get("message") or response.reason_phrase or "Request failed",
                errors=body.get("errors") or [],
            )
        return body

    # Auth

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})
        self.token = body["data"]["token"]
        return body["data"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = body["data"]["token"]
        return body["data"]

    def logout(self) -> None:
        self.token = None

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["data"]

    # Tasks

    def list_tasks(
        self,
        status: Optional[int] = None,
        priority: Optional[int] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        cursor: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = _clean(
            {
                "status": status,
                "priority": priority,
                "search": search,
                "includeDeleted": include_deleted or None,
                "sortBy": sort_by,
                "sortOrder": sort_order,
                "cursor": cursor,
                "limit": limit,
            }
        )
        return self._request("GET", "/tasks", params=params)["data"]

    def get_task(self, task_id: int, include_deleted: bool = False) -> Dict[str, Any]:
        params = _clean({"includeDeleted": include_deleted or None})
        return self._request("GET", f"/tasks/{task_id}", params=params)["data"]

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        priority: int = 1,
        due_date: Optional[datetime] = None,
        tags: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "title": title,
            "description": description,
            "priority": priority,
            "dueDate": _iso(due_date),
            "tags": tags,
        }
        return self._request("POST", "/tasks", json=payload)["data"]

    def update_task(
        self,
        task_id: int,
        title: str,
        status: int,
        priority: int,
        description: Optional[str] = None,
        due_date: Optional[datetime] = None,
        tags: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "title": title,
            "description": description,
            "status": status,
            "priority": priority,
            "dueDate": _iso(due_date),
            "tags": tags,
        }
        return self._request("PUT", f"/tasks/{task_id}", json=payload)["data"]

    def delete_task(self, task_id: int) -> str:
        return self._request("DELETE", f"/tasks/{task_id}")["message"]

    def restore_task(self, task_id: int) -> str:
        return self._request("POST", f"/tasks/{task_id}/restore")["message"]

    def bulk_update(
        self,
        task_ids: List[int],
        status: Optional[int] = None,
        delete: Optional[bool] = None,
    ) -> str:
        payload = _clean({"taskIds": task_ids, "status": status, "delete": delete})
        return self._request("PATCH", "/tasks/bulk", json=payload)["message"]
