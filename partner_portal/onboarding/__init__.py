from .rules import (  # noqa: F401
    ALLOWED_AUTH_TYPES,
    allowed_auth_types,
    check_interface,
    required_fields,
    validate_interface,
)
from .wizard import OnboardingWizard, WizardStep  # noqa: F401
