import uuid

import pytest

from partner_portal.exceptions import ValidationError
from partner_portal.onboarding import OnboardingWizard

from tests._factories import SFTP_BASIC_INTERFACE


COMPANY = {
    "companyName": "Acme Corp",
    "contactName": "Jane Doe",
    "contactEmail": "jane@acme.example",
    "contactPhone": "555-010-2000",
}

GENERIC_INFO = {
    "companyName": "Acme Corp",
    "industryType": "Retail",
    "businessDescription": "We sell widgets across three continents.",
    "primaryGoals": "Automate purchase order exchange.",
    "contactName": "Jane Doe",
    "contactEmail": "jane@acme.example",
    "contactPhone": "555-010-2000",
}


class RecordingSubmit:
    def __init__(self, fail: Exception | None = None):
        self.payloads = []
        self.fail = fail

    def __call__(self, payload):
        self.payloads.append(payload)
        if self.fail is not None:
            raise self.fail
        return {"id": "new-partner"}


def _b2b_wizard(submit):
    wizard = OnboardingWizard("B2B_EDI", submit)
    wizard.update(COMPANY)
    wizard.next()
    wizard.next()  # security: certificate is optional
    wizard.update(SFTP_BASIC_INTERFACE)
    wizard.next()
    return wizard


def test_b2b_wizard_has_four_steps_and_submits_on_fourth():
    submit = RecordingSubmit()
    wizard = _b2b_wizard(submit)

    assert wizard.total_steps == 4
    assert wizard.current_step == 4
    assert submit.payloads == []

    wizard.update({"acceptTerms": True})
    result = wizard.next()

    assert result == {"id": "new-partner"}
    assert len(submit.payloads) == 1
    payload = submit.payloads[0]
    assert payload["partnerType"] == "B2B_EDI"
    assert payload["companyName"] == "Acme Corp"
    assert payload["interfaceConfig"]["interface"]["host"] == "sftp.acme.example"
    assert payload["interfaceConfig"]["interface"]["port"] == "22"
    assert payload["interfaceConfig"]["review"] == {"acceptTerms": True}

    assert wizard.closed is True
    assert wizard.current_step == 1
    assert wizard.data["companyInfo"] == {}


def test_generic_wizard_submits_on_third_step():
    submit = RecordingSubmit()
    wizard = OnboardingWizard("GENERIC", submit, user_id=uuid.UUID(int=7))
    assert wizard.total_steps == 3

    wizard.update(GENERIC_INFO)
    wizard.next()
    wizard.update({"trainingNeeded": True, "resourcesRequested": ["api-docs"]})
    wizard.next()
    wizard.update({"acceptTerms": True})
    wizard.next()

    payload = submit.payloads[0]
    assert payload["partnerType"] == "GENERIC"
    assert payload["industry"] == "Retail"
    assert payload["businessDescription"] == GENERIC_INFO["businessDescription"]
    assert payload["interfaceConfig"]["resources"]["resourcesRequested"] == ["api-docs"]
    assert payload["userId"] == str(uuid.UUID(int=7))


def test_invalid_step_does_not_advance_and_reports_every_field():
    wizard = OnboardingWizard("B2B_EDI", RecordingSubmit())
    wizard.update({"companyName": "A", "contactEmail": "not-an-email"})

    with pytest.raises(ValidationError) as exc_info:
        wizard.next()

    assert wizard.current_step == 1
    assert set(exc_info.value.fields) == {
        "companyInfo.companyName",
        "companyInfo.contactName",
        "companyInfo.contactEmail",
        "companyInfo.contactPhone",
    }


def test_interface_step_applies_conditional_rules():
    wizard = OnboardingWizard("B2B_EDI", RecordingSubmit())
    wizard.update(COMPANY)
    wizard.next()
    wizard.next()
    wizard.update({"protocol": "https", "authType": "apiKey"})

    with pytest.raises(ValidationError) as exc_info:
        wizard.next()

    assert exc_info.value.fields == ["interface.httpHeaderName", "interface.apiKeyValue"]
    assert wizard.current_step == 3


def test_interface_type_errors_do_not_hide_missing_fields():
    wizard = OnboardingWizard("B2B_EDI", RecordingSubmit())
    wizard.update(COMPANY)
    wizard.next()
    wizard.next()
    wizard.update({"protocol": "sftp", "authType": "basic", "endpoints": "oops"})

    with pytest.raises(ValidationError) as exc_info:
        wizard.next()

    assert set(exc_info.value.fields) == {
        "interface.endpoints",
        *(
            f"interface.{f}"
            for f in ("host", "port", "sourcePath", "supportFormatType", "fileNamePattern", "archivalPath", "username", "password")
        ),
    }
    assert wizard.current_step == 3


def test_terms_must_be_accepted():
    submit = RecordingSubmit()
    wizard = _b2b_wizard(submit)

    with pytest.raises(ValidationError) as exc_info:
        wizard.next()

    assert exc_info.value.violations[0].message == "You must accept the terms and conditions"
    assert submit.payloads == []


def test_previous_is_noop_on_first_step():
    wizard = OnboardingWizard("B2B_EDI", RecordingSubmit())
    wizard.previous()
    assert wizard.current_step == 1

    wizard.update(COMPANY)
    wizard.next()
    wizard.previous()
    assert wizard.current_step == 1
    assert wizard.data["companyInfo"]["companyName"] == "Acme Corp"


def test_failed_submission_keeps_step_and_data():
    submit = RecordingSubmit(fail=RuntimeError("network down"))
    wizard = _b2b_wizard(submit)
    wizard.update({"acceptTerms": True})

    with pytest.raises(RuntimeError):
        wizard.next()

    assert wizard.closed is False
    assert wizard.current_step == 4
    assert wizard.data["companyInfo"]["companyName"] == "Acme Corp"
    assert wizard.data["interface"]["host"] == "sftp.acme.example"


def test_selected_certificate_is_copied_into_payload():
    submit = RecordingSubmit()
    wizard = OnboardingWizard("B2B_EDI", submit)
    wizard.update(COMPANY)
    wizard.next()

    certificate = {"id": str(uuid.uuid4()), "fileName": "acme.pem", "alias": "prod"}
    wizard.select_certificate(certificate)
    certificate["alias"] = "renamed"

    wizard.next()
    wizard.update(SFTP_BASIC_INTERFACE)
    wizard.next()
    wizard.update({"acceptTerms": True})
    wizard.next()

    security = submit.payloads[0]["interfaceConfig"]["security"]
    assert security["selectedCertificateId"] == certificate["id"]
    assert security["certificateDetails"]["alias"] == "prod"


def test_unknown_partner_type_is_rejected():
    with pytest.raises(ValueError):
        OnboardingWizard("B2C", RecordingSubmit())
