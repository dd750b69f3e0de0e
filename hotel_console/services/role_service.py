import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hotel_console.models.role import Role
from hotel_console.repositories.role_repository import RoleRepository
from hotel_console.schemas.role_schemas import RoleCreate, RoleUpdate
from hotel_console.services.hotel_service import HotelService
from hotel_console.core.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class RoleService:
    """
    Service layer for hotel roles.

    Grants are stored under the role *name*, so this is the one place that
    guarantees names are unique inside a hotel.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = RoleRepository(db)
        self.hotels = HotelService(db)

    def list_roles(self, hotel_id: int) -> list[Role]:
        self.hotels.get_hotel(hotel_id)
        return self.repo.get_by_hotel(hotel_id)

    def get_role(self, hotel_id: int, role_id: int) -> Role:
        """
        Get a role of the hotel.

        Raises:
            NotFoundException: If role not found or belongs to another hotel
        """
        role = self.repo.get_by_id_and_hotel(role_id, hotel_id)
        if not role:
            raise NotFoundException("Role not found in this hotel")
        return role

    def create_role(self, hotel_id: int, data: RoleCreate) -> Role:
        """
        Create a role in a hotel.

        Raises:
            NotFoundException: If hotel does not exist
            ValidationException: If the hotel already has a role with this name
        """
        self.hotels.get_hotel(hotel_id)
        name = data.name.strip()
        self._ensure_name_free(hotel_id, name)

        try:
            role = self.repo.create(Role(hotel_id=hotel_id, name=name))
        except IntegrityError:
            self.db.rollback()
            raise ValidationException(f"Role '{name}' already exists in this hotel")

        logger.info("Created role '%s' in hotel %s", name, hotel_id)
        return role

    def rename_role(self, hotel_id: int, role_id: int, data: RoleUpdate) -> Role:
        """
        Rename a role.

        Grants and overrides saved under the old name are not moved; they
        stay dormant until a role with that name exists again.
        """
        role = self.get_role(hotel_id, role_id)
        name = data.name.strip()
        if name == role.name:
            return role
        self._ensure_name_free(hotel_id, name)

        old_name = role.name
        role.name = name
        try:
            role = self.repo.update(role)
        except IntegrityError:
            self.db.rollback()
            raise ValidationException(f"Role '{name}' already exists in this hotel")

        logger.info("Renamed role '%s' to '%s' in hotel %s", old_name, name, hotel_id)
        return role

    def delete_role(self, hotel_id: int, role_id: int) -> None:
        role = self.get_role(hotel_id, role_id)
        name = role.name
        self.repo.delete(role)
        logger.info("Deleted role '%s' from hotel %s", name, hotel_id)

    def get_by_name(self, hotel_id: int, name: str) -> Role:
        role = self.repo.get_by_name(hotel_id, name)
        if not role:
            raise NotFoundException(f"Role '{name}' not found in this hotel")
        return role

    def _ensure_name_free(self, hotel_id: int, name: str) -> None:
        if not name:
            raise ValidationException("Role name must not be blank")
        if self.repo.get_by_name(hotel_id, name):
            raise ValidationException(f"Role '{name}' already exists in this hotel")
