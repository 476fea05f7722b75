"""Client-side onboarding wizard.

State lives only in memory until the final submit; nothing is persisted
between steps.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any
from uuid import UUID

from partner_portal.exceptions import ValidationError
from partner_portal.schemas.certificate import CertificateSnapshot

from .steps import STEPS_BY_PARTNER_TYPE, WizardStep


logger = logging.getLogger("portal.wizard")

Submitter = Callable[[dict[str, Any]], Any]


class OnboardingWizard:
    def __init__(self, partner_type: str, submit: Submitter, *, user_id: UUID | str | None = None) -> None:
        if partner_type not in STEPS_BY_PARTNER_TYPE:
            raise ValueError(f"Unknown partner type: {partner_type}")

        self.partner_type = partner_type
        self.steps: tuple[WizardStep, ...] = STEPS_BY_PARTNER_TYPE[partner_type]
        self.user_id = str(user_id) if user_id is not None else None
        self._submit = submit

        self.current_step = 1
        self.data: dict[str, dict[str, Any]] = {}
        self.closed = False
        self.reset()

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def step(self) -> WizardStep:
        return self.steps[self.current_step - 1]

    @property
    def is_last_step(self) -> bool:
        return self.current_step == self.total_steps

    def reset(self) -> None:
        self.current_step = 1
        self.data = {step.key: {} for step in self.steps}
        self.data["review"] = {"acceptTerms": False}

    def update(self, values: Mapping[str, Any], *, step: str | None = None) -> None:
        """Merge ``values`` into the current (or named) step's data."""

        key = step or self.step.key
        if key not in self.data:
            raise KeyError(f"Unknown step for {self.partner_type}: {key}")
        self.data[key].update(values)

    def select_certificate(self, certificate: Any) -> None:
        """Copy a certificate's metadata into the security step.

        The copy is a snapshot: later edits to the certificate do not reach it.
        """

        if "security" not in self.data:
            raise KeyError(f"{self.partner_type} onboarding has no security step")

        if isinstance(certificate, Mapping):
            snapshot = CertificateSnapshot.model_validate(dict(certificate))
        else:
            snapshot = CertificateSnapshot.model_validate(certificate, from_attributes=True)

        self.data["security"] = {
            "selectedCertificateId": str(snapshot.id),
            "selectedCertificate": snapshot.model_dump(mode="json", by_alias=True),
        }

    def validate_step(self, step: WizardStep | None = None) -> dict[str, Any]:
        step = step or self.step
        cleaned, violations = step.clean(self.data[step.key])
        if violations:
            raise ValidationError([v.prefixed(step.key) for v in violations])
        return cleaned

    def next(self) -> Any:
        """Advance one step, or submit when already on the last step.

        Returns the submit result on submission, otherwise None.
        """

        self.validate_step()
        if not self.is_last_step:
            self.current_step += 1
            return None
        return self.submit()

    def previous(self) -> None:
        if self.current_step > 1:
            self.current_step -= 1

    def build_payload(self) -> dict[str, Any]:
        cleaned = {step.key: step.clean(self.data[step.key])[0] for step in self.steps}

        if self.partner_type == "B2B_EDI":
            security = cleaned["security"]
            payload: dict[str, Any] = {
                **{k: v for k, v in cleaned["companyInfo"].items() if v is not None},
                "partnerType": self.partner_type,
                "interfaceConfig": {
                    "security": {
                        "selectedCertificateId": security.get("selectedCertificateId"),
                        "certificateDetails": security.get("selectedCertificate"),
                    },
                    "interface": cleaned["interface"],
                    "review": cleaned["review"],
                },
            }
        else:
            info = cleaned["partnerInfo"]
            payload = {
                "companyName": info.get("companyName"),
                "contactName": info.get("contactName"),
                "contactEmail": info.get("contactEmail"),
                "contactPhone": info.get("contactPhone"),
                "industry": info.get("industryType"),
                "businessDescription": info.get("businessDescription"),
                "primaryGoals": info.get("primaryGoals"),
                "partnerType": self.partner_type,
                "interfaceConfig": {
                    "resources": cleaned["resources"],
                    "review": cleaned["review"],
                },
            }

        if self.user_id is not None:
            payload["userId"] = self.user_id
        return payload

    def submit(self) -> Any:
        """Send the whole wizard as one creation request.

        On success the wizard resets and closes. On failure the error
        propagates and step and data are left untouched for a retry.
        """

        for step in self.steps:
            self.validate_step(step)
        payload = self.build_payload()

        try:
            result = self._submit(payload)
        except Exception:
            logger.warning("wizard_submit_failed partner_type=%s step=%s", self.partner_type, self.current_step)
            raise

        self.reset()
        self.closed = True
        return result
