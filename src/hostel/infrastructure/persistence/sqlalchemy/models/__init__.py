from hostel.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from hostel.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

__all__ = ["AccountModel", "Base", "TimestampMixin"]
