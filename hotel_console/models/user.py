from sqlalchemy import String, Integer, ForeignKey, Table, Column
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from hotel_console.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from hotel_console.models.hotel import Hotel
    from hotel_console.models.role import Role


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base, TimestampMixin):
    """
    Hotel staff member.

    A user may hold any number of roles, all from their own hotel.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hotel_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    hotel: Mapped["Hotel"] = relationship("Hotel", back_populates="users")
    roles: Mapped[list["Role"]] = relationship(
        "Role", secondary=user_roles, back_populates="users"
    )

    @property
    def role_ids(self) -> list[int]:
        return [role.id for role in self.roles]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, hotel_id={self.hotel_id}, email='{self.email}')>"
