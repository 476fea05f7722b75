"""Per-step forms for the onboarding wizard."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, ValidationError as PydanticValidationError, field_validator

from partner_portal.exceptions import FieldViolation
from partner_portal.schemas.base import CamelModel
from partner_portal.schemas.certificate import CertificateSnapshot
from partner_portal.schemas.partner import InterfaceSettings, ResourcesConfig

from .rules import check_interface, merge_violations


class CompanyInfoForm(CamelModel):
    company_name: str = Field(min_length=2)
    contact_name: str = Field(min_length=2)
    contact_email: EmailStr
    contact_phone: str = Field(min_length=10)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class SecurityForm(CamelModel):
    selected_certificate_id: UUID | None = None
    selected_certificate: CertificateSnapshot | None = None

    @field_validator("selected_certificate_id", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Any:
        return None if value == "" else value


class ReviewForm(CamelModel):
    accept_terms: bool = Field(default=False, validate_default=True)

    @field_validator("accept_terms")
    @classmethod
    def _must_accept(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must accept the terms and conditions")
        return value


class GenericPartnerInfoForm(CamelModel):
    company_name: str = Field(min_length=2)
    industry_type: str = Field(min_length=2)
    business_description: str = Field(min_length=10)
    primary_goals: str = Field(min_length=10)
    contact_name: str = Field(min_length=2)
    contact_email: EmailStr
    contact_phone: str = Field(min_length=10)


FIELD_MESSAGES = {
    "companyName": "Company name is required",
    "contactName": "Contact name is required",
    "contactEmail": "Invalid email address",
    "contactPhone": "Phone number is required",
    "industryType": "Industry type is required",
    "businessDescription": "Please provide a brief description of your business",
    "primaryGoals": "Please describe your primary goals",
    "acceptTerms": "You must accept the terms and conditions",
}


def violations_from_pydantic(exc: PydanticValidationError) -> list[FieldViolation]:
    violations = []
    for error in exc.errors():
        path = tuple(str(part) for part in error["loc"])
        message = FIELD_MESSAGES.get(path[0], error["msg"]) if path else error["msg"]
        violations.append(FieldViolation(path=path, message=message))
    return violations


@dataclass(frozen=True)
class WizardStep:
    key: str
    title: str
    form: type[BaseModel]
    rules: Callable[[Mapping[str, Any]], list[FieldViolation]] | None = None

    def clean(self, data: Mapping[str, Any]) -> tuple[dict[str, Any], list[FieldViolation]]:
        """Parse step data; return the normalized camelCase dict and all violations."""

        try:
            parsed = self.form.model_validate(dict(data))
        except PydanticValidationError as exc:
            violations = violations_from_pydantic(exc)
            if self.rules:
                # Rules still run on the raw values so missing fields are reported too.
                violations = merge_violations(violations, self.rules(dict(data)))
            return dict(data), violations

        cleaned = parsed.model_dump(mode="json", by_alias=True)
        violations = list(self.rules(cleaned)) if self.rules else []
        return cleaned, violations


COMPANY_INFO = WizardStep("companyInfo", "Company Info", CompanyInfoForm)
SECURITY = WizardStep("security", "Security", SecurityForm)
INTERFACE = WizardStep("interface", "Interface", InterfaceSettings, rules=check_interface)
REVIEW = WizardStep("review", "Review & Submit", ReviewForm)
PARTNER_INFO = WizardStep("partnerInfo", "Partner Info", GenericPartnerInfoForm)
RESOURCES = WizardStep("resources", "Resources", ResourcesConfig)

STEPS_BY_PARTNER_TYPE: dict[str, tuple[WizardStep, ...]] = {
    "B2B_EDI": (COMPANY_INFO, SECURITY, INTERFACE, REVIEW),
    "GENERIC": (PARTNER_INFO, RESOURCES, REVIEW),
}
