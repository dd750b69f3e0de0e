"""Whole-resource storage for the three privilege documents."""

from enum import Enum as PyEnum
from sqlalchemy import String, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from hotel_console.models.base import Base, TimestampMixin


class PrivilegeResource(str, PyEnum):
    """Keys of the independently saved privilege documents."""

    HOTEL_PRIVILEGES = "hotel_privileges"
    HOTEL_ROLE_PRIVILEGES = "hotel_role_privileges"
    USER_PRIVILEGES = "user_privileges"


class PrivilegeDocument(Base, TimestampMixin):
    """
    One JSON document per privilege resource.

    Documents are read and written whole. `version` is the mapper's version
    counter: each UPDATE is conditional on the version that was loaded, so
    a save racing another one fails with StaleDataError.
    """

    __tablename__ = "privilege_documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resource: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<PrivilegeDocument(resource='{self.resource}', version={self.version})>"
