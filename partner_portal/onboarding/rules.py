"""Conditional required-field rules for the interface-configuration step.

The requirement set is a pure function of ``(protocol, authType)``; checking
a payload collects every missing field in one pass.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from partner_portal.exceptions import FieldViolation, ValidationError


FILE_TRANSFER_PROTOCOLS = frozenset({"sftp", "ftp"})

FILE_TRANSFER_FIELDS = (
    "host",
    "port",
    "sourcePath",
    "supportFormatType",
    "fileNamePattern",
    "archivalPath",
)

# Presentation-layer choices; not re-validated by check_interface().
ALLOWED_AUTH_TYPES: dict[str, tuple[str, ...]] = {
    "sftp": ("basic", "identityKey", "basicIdentityKey"),
    "ftp": ("basic", "identityKey", "basicIdentityKey"),
    "https": ("none", "basic", "apiKey"),
}

FIELD_MESSAGES: dict[str, str] = {
    "host": "Host is required",
    "port": "Port is required",
    "sourcePath": "Source path is required",
    "supportFormatType": "Support Format type is required",
    "fileNamePattern": "File name pattern is required",
    "archivalPath": "Archival path is required",
    "username": "Username is required",
    "password": "Password is required",
    "identityKeyId": "Identity Key is required",
    "httpHeaderName": "HTTP header name is required",
    "apiKeyValue": "API key is required",
    "endpoints": "At least one endpoint is required",
}


def required_fields(protocol: str | None, auth_type: str | None) -> frozenset[str]:
    if protocol in FILE_TRANSFER_PROTOCOLS:
        fields = set(FILE_TRANSFER_FIELDS)
        if auth_type in ("basic", "basicIdentityKey"):
            fields.update(("username", "password"))
        if auth_type in ("identityKey", "basicIdentityKey"):
            fields.add("identityKeyId")
        return frozenset(fields)

    if protocol == "https":
        if auth_type == "basic":
            return frozenset({"username", "password"})
        if auth_type == "apiKey":
            return frozenset({"httpHeaderName", "apiKeyValue"})
        return frozenset()

    if protocol == "as2":
        return frozenset({"endpoints"})

    return frozenset()


def allowed_auth_types(protocol: str | None) -> tuple[str, ...]:
    return ALLOWED_AUTH_TYPES.get(protocol or "", ())


def _is_missing(field: str, value: Any) -> bool:
    if field == "endpoints":
        return not value
    return value is None or value == ""


def _ordered(fields: frozenset[str]) -> list[str]:
    # Stable, form-like ordering for error output.
    order = list(FIELD_MESSAGES)
    return sorted(fields, key=lambda f: order.index(f) if f in order else len(order))


def check_interface(data: Mapping[str, Any]) -> list[FieldViolation]:
    """Return every violation for a camelCase interface payload."""

    protocol = data.get("protocol") or None
    auth_type = data.get("authType") or None

    return [
        FieldViolation(path=(field,), message=FIELD_MESSAGES.get(field, f"{field} is required"))
        for field in _ordered(required_fields(protocol, auth_type))
        if _is_missing(field, data.get(field))
    ]


def merge_violations(reported: list[FieldViolation], extra: list[FieldViolation]) -> list[FieldViolation]:
    """Append ``extra`` violations whose path is not already covered by ``reported``."""

    seen = [v.path for v in reported]
    merged = list(reported)
    for violation in extra:
        if not any(path[: len(violation.path)] == violation.path for path in seen):
            merged.append(violation)
    return merged


def validate_interface(data: Mapping[str, Any]) -> None:
    violations = check_interface(data)
    if violations:
        raise ValidationError(violations)
