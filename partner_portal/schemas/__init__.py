from .approval import ApprovalDecision, ApprovalRead, ApprovalWithPartner  # noqa: F401
from .certificate import CertificateRead, CertificateSnapshot  # noqa: F401
from .document import DocumentRead  # noqa: F401
from .partner import (  # noqa: F401
    InterfaceConfig,
    InterfaceSettings,
    PartnerCreate,
    PartnerRead,
    PartnerUpdate,
)
from .stats import StatsRead  # noqa: F401
from .user import UserRead  # noqa: F401
