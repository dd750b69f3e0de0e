"""Hotel-scoped role used to group page grants."""

from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from hotel_console.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hotel_console.models.hotel import Hotel
    from hotel_console.models.user import User


class Role(Base, TimestampMixin):
    """
    A named role inside one hotel.

    Grants are keyed by (hotel, role name), so the name must be unique
    within the hotel. The same name in two hotels is two unrelated roles.
    """

    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hotel_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="roles")
    users: Mapped[list["User"]] = relationship(
        "User", secondary="user_roles", back_populates="roles"
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("hotel_id", "name", name="uq_hotel_role_name"),
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, hotel_id={self.hotel_id}, name='{self.name}')>"
