"""Thin httpx client for the partner portal REST API.

Used by the onboarding wizard (``create_partner`` is its submit callable)
and by admin tooling.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

from partner_portal.exceptions import (
    AuthenticationError,
    FieldViolation,
    NotFound,
    PortalError,
    ValidationError,
)


logger = logging.getLogger("portal.client")


class ApiError(PortalError):
    def __init__(self, status_code: int, message: str, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _violation(error: dict[str, Any]) -> FieldViolation:
    path = error.get("path") or error.get("field", "").split(".")
    return FieldViolation(path=tuple(str(p) for p in path), message=error.get("message", ""))


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = {"detail": response.text}

    detail = body.get("detail") if isinstance(body, dict) else None
    message = detail if isinstance(detail, str) else response.reason_phrase
    status = response.status_code

    logger.info("api_error status=%s path=%s detail=%s", status, response.request.url.path, message)

    if status == 400 and isinstance(body, dict) and body.get("errors"):
        raise ValidationError([_violation(e) for e in body["errors"]], message)
    if status == 404:
        raise NotFound(message)
    if status == 401:
        raise AuthenticationError(message)
    raise ApiError(status, message, body)


class PortalClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        user_id: UUID | str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        self.user_id = str(user_id) if user_id is not None else None

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {}) or {}
        if self.user_id is not None:
            headers.setdefault("X-User-Id", self.user_id)

        response = self._http.request(method, f"/api/v1{path}", headers=headers, **kwargs)
        _raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Session

    def login(self, username: str, password: str) -> dict[str, Any]:
        body = self._request("POST", "/auth/login", json={"username": username, "password": password})
        self.user_id = body["user"]["id"]
        return body["user"]

    # Partners

    def create_partner(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/partners", json=payload)

    def get_partner(self, partner_id: UUID | str) -> dict[str, Any]:
        return self._request("GET", f"/partners/{partner_id}")

    def my_partner(self) -> dict[str, Any]:
        return self._request("GET", "/partners/me")

    # Approvals

    def list_pending_approvals(self) -> list[dict[str, Any]]:
        return self._request("GET", "/approvals/pending")

    def decide(self, partner_id: UUID | str, status: str, comments: str | None = None) -> dict[str, Any]:
        return self._request("POST", f"/approvals/{partner_id}", json={"status": status, "comments": comments})

    def stats(self) -> dict[str, int]:
        return self._request("GET", "/stats")

    # Certificates

    def upload_certificate(
        self,
        file_name: str,
        content: bytes,
        *,
        content_type: str = "application/octet-stream",
        document_type: str = "certificate",
        alias: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        form = {"documentType": document_type}
        if alias is not None:
            form["alias"] = alias
        if description is not None:
            form["description"] = description
        if self.user_id is not None:
            form["userId"] = self.user_id

        files = {"file": (file_name, content, content_type)}
        return self._request("POST", "/certificates", data=form, files=files)

    def list_certificates(self, *, user_id: UUID | str | None = None) -> list[dict[str, Any]]:
        params = {"userId": str(user_id)} if user_id is not None else None
        return self._request("GET", "/certificates", params=params)
