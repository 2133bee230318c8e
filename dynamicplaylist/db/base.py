"""Import all models here for Alembic autogenerate."""

from dynamicplaylist.db.base_class import Base
from dynamicplaylist.models import tag  # noqa: F401

__all__ = ["Base"]
