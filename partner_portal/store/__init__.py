from .base import PortalStore  # noqa: F401
from .database import DatabaseStore  # noqa: F401
from .memory import InMemoryStore  # noqa: F401
