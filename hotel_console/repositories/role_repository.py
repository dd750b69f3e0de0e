"""Repository for Role model operations."""

from sqlalchemy.orm import Session
from hotel_console.models.role import Role


class RoleRepository:
    """Repository for hotel-scoped roles"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_hotel(self, hotel_id: int) -> list[Role]:
        """Get all roles of a hotel ordered by name"""
        return (
            self.db.query(Role)
            .filter(Role.hotel_id == hotel_id)
            .order_by(Role.name.asc())
            .all()
        )

    def get_by_id_and_hotel(self, role_id: int, hotel_id: int) -> Role | None:
        """
        Get role ensuring it belongs to the hotel.

        Returns None if role doesn't exist or belongs to another hotel.
        """
        return (
            self.db.query(Role)
            .filter(Role.id == role_id, Role.hotel_id == hotel_id)
            .first()
        )

    def get_by_name(self, hotel_id: int, name: str) -> Role | None:
        """Get role by its name within a hotel (exact match)"""
        return (
            self.db.query(Role)
            .filter(Role.hotel_id == hotel_id, Role.name == name)
            .first()
        )

    def get_many(self, hotel_id: int, role_ids: list[int]) -> list[Role]:
        """Get the roles among `role_ids` that belong to the hotel"""
        if not role_ids:
            return []
        return (
            self.db.query(Role)
            .filter(Role.hotel_id == hotel_id, Role.id.in_(role_ids))
            .all()
        )

    def create(self, role: Role) -> Role:
        """Create new role"""
        self.db.add(role)
        self.db.commit()
        self.db.refresh(role)
        return role

    def update(self, role: Role) -> Role:
        """Update existing role"""
        self.db.commit()
        self.db.refresh(role)
        return role

    def delete(self, role: Role) -> None:
        """
        Delete role.

        Grants stored under the role name are not touched; they stay
        dormant and resolve to nothing while no role carries that name.
        """
        self.db.delete(role)
        self.db.commit()
