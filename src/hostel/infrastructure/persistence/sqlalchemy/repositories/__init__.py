# ruff: noqa: E501 - Long import paths in __init__.py re-exports
from hostel.infrastructure.persistence.sqlalchemy.repositories.account_repository import AccountRepositorySQLAlchemy

__all__ = ["AccountRepositorySQLAlchemy"]
