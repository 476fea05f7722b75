# Import models here so Alembic can discover them via metadata
from .base import Base  # noqa: F401
from .user import User  # noqa: F401
from .partner import Partner  # noqa: F401
from .document import Document  # noqa: F401
from .approval import Approval  # noqa: F401
from .certificate import Certificate  # noqa: F401
