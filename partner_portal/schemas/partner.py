from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import Field, field_validator

from .base import CamelModel
from .certificate import CertificateSnapshot


PartnerType = Literal["B2B_EDI", "GENERIC"]
PartnerStatus = Literal["DRAFT", "SUBMITTED", "PENDING_APPROVAL", "APPROVED", "REJECTED"]

# Partner columns that mirror InterfaceSettings.
INTERFACE_FIELDS = (
    "protocol",
    "auth_type",
    "direction",
    "username",
    "password",
    "http_header_name",
    "api_key_value",
    "identity_key_id",
    "host",
    "port",
    "character_encoding",
    "source_path",
    "support_format_type",
    "file_name_pattern",
    "archival_path",
    "additional_settings",
    "endpoints",
)

# Stored for the integration but never returned by read models.
SECRET_FIELDS = frozenset({"password", "api_key_value"})


def _port_as_str(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


class Endpoint(CamelModel):
    name: str | None = None
    url: str | None = None


class InterfaceSettings(CamelModel):
    protocol: str | None = None
    auth_type: str | None = None
    direction: str | None = None

    endpoints: list[Endpoint] | None = None

    username: str | None = None
    password: str | None = None
    http_header_name: str | None = None
    api_key_value: str | None = None
    identity_key_id: str | None = None

    host: str | None = None
    port: str | None = None
    character_encoding: str | None = None
    source_path: str | None = None
    support_format_type: str | None = None
    file_name_pattern: str | None = None
    archival_path: str | None = None

    additional_settings: dict[str, str] | None = None

    @field_validator("port", mode="before")
    @classmethod
    def _coerce_port(cls, value: Any) -> Any:
        return _port_as_str(value)

    def rule_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SecurityConfig(CamelModel):
    selected_certificate_id: UUID | None = None
    certificate_details: CertificateSnapshot | None = None

    @field_validator("selected_certificate_id", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        return None if value == "" else value


class ReviewConfig(CamelModel):
    accept_terms: bool = False


class ResourcesConfig(CamelModel):
    training_needed: bool = False
    resources_requested: list[str] = Field(default_factory=list)
    special_requirements: str | None = None


class InterfaceConfig(CamelModel):
    security: SecurityConfig | None = None
    interface: InterfaceSettings | None = None
    review: ReviewConfig | None = None
    resources: ResourcesConfig | None = None


class PartnerCreate(CamelModel):
    user_id: UUID | None = None

    company_name: str
    contact_name: str
    contact_email: str
    contact_phone: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    industry: str | None = None
    website: str | None = None
    notes: str | None = None

    business_description: str | None = None
    primary_goals: str | None = None

    partner_type: PartnerType
    interface_config: InterfaceConfig | None = None


class PartnerUpdate(CamelModel):
    company_name: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    industry: str | None = None
    website: str | None = None
    notes: str | None = None

    business_description: str | None = None
    primary_goals: str | None = None
    resources: dict[str, Any] | None = None

    partner_type: PartnerType | None = None
    status: PartnerStatus | None = None

    protocol: str | None = None
    auth_type: str | None = None
    direction: str | None = None
    username: str | None = None
    password: str | None = None
    http_header_name: str | None = None
    api_key_value: str | None = None
    identity_key_id: str | None = None
    host: str | None = None
    port: str | None = None
    character_encoding: str | None = None
    source_path: str | None = None
    support_format_type: str | None = None
    file_name_pattern: str | None = None
    archival_path: str | None = None
    additional_settings: dict[str, str] | None = None
    endpoints: list[Endpoint] | None = None

    interface_config: dict[str, Any] | None = None

    @field_validator("port", mode="before")
    @classmethod
    def _coerce_port(cls, value: Any) -> Any:
        return _port_as_str(value)


class PartnerRead(CamelModel):
    id: UUID
    user_id: UUID

    company_name: str
    contact_name: str
    contact_email: str
    contact_phone: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    industry: str | None = None
    website: str | None = None
    notes: str | None = None

    business_description: str | None = None
    primary_goals: str | None = None
    resources: dict[str, Any] | None = None

    partner_type: str
    status: str

    protocol: str | None = None
    auth_type: str | None = None
    direction: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, exclude=True)
    http_header_name: str | None = None
    api_key_value: str | None = Field(default=None, exclude=True)
    identity_key_id: str | None = None
    host: str | None = None
    port: str | None = None
    character_encoding: str | None = None
    source_path: str | None = None
    support_format_type: str | None = None
    file_name_pattern: str | None = None
    archival_path: str | None = None
    additional_settings: dict[str, Any] | None = None
    endpoints: list[dict[str, Any]] | None = None

    interface_config: dict[str, Any] | None = None

    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None

    created_at: datetime
    updated_at: datetime
