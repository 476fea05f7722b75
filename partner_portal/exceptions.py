"""Domain error taxonomy.

Services raise these; ``partner_portal.api.errors`` maps them to HTTP
responses. Nothing here is retried automatically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldViolation:
    path: tuple[str, ...]
    message: str

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def prefixed(self, *prefix: str) -> "FieldViolation":
        return FieldViolation(path=(*prefix, *self.path), message=self.message)

    def as_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "field": self.dotted_path, "message": self.message}


class PortalError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, Any]:
        return {"detail": self.message}


class ValidationError(PortalError):
    """One or more fields violate a schema or rule; every violation is kept."""

    status_code = 400

    def __init__(self, violations: list[FieldViolation], message: str = "Validation error") -> None:
        super().__init__(message)
        self.violations = list(violations)

    @property
    def fields(self) -> list[str]:
        return [v.dotted_path for v in self.violations]

    def prefixed(self, *prefix: str) -> "ValidationError":
        return ValidationError([v.prefixed(*prefix) for v in self.violations], self.message)

    def payload(self) -> dict[str, Any]:
        return {"detail": self.message, "errors": [v.as_dict() for v in self.violations]}


class NotFound(PortalError):
    status_code = 404


class AuthenticationError(PortalError):
    status_code = 401


class UploadRejected(PortalError):
    status_code = 400


class UploadTooLarge(UploadRejected):
    def __init__(self, max_bytes: int) -> None:
        mb = max_bytes // (1024 * 1024)
        super().__init__(f"File is too large. Maximum size is {mb}MB.")
        self.max_bytes = max_bytes


class StorageBackendError(PortalError):
    """Object-storage call failed; surfaced to the caller with backend detail."""

    status_code = 400

    def __init__(self, message: str, *, backend_detail: str | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.backend_detail = backend_detail
        self.code = code

    def payload(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "details": self.backend_detail,
            "error": {"code": self.code},
        }
