from app.models.base import Base
from app.models.services import Service

__all__ = ["Base", "Service"]
