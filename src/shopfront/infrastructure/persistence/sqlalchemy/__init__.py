"""SQLAlchemy persistence: database handle, models and repositories."""

from shopfront.infrastructure.persistence.sqlalchemy.database import Database

__all__ = ["Database"]
