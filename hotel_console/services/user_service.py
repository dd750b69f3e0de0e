from sqlalchemy.orm import Session

from hotel_console.models.role import Role
from hotel_console.models.user import User
from hotel_console.repositories.role_repository import RoleRepository
from hotel_console.repositories.user_repository import UserRepository
from hotel_console.schemas.user_schemas import UserCreate, UserRolesUpdate
from hotel_console.services.hotel_service import HotelService
from hotel_console.core.exceptions import NotFoundException, ValidationException


class UserService:
    """Service for hotel staff users and their role memberships"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)
        self.role_repo = RoleRepository(db)
        self.hotels = HotelService(db)

    def list_users(self, hotel_id: int) -> list[User]:
        self.hotels.get_hotel(hotel_id)
        return self.repo.get_by_hotel(hotel_id)

    def get_user(self, hotel_id: int, user_id: int) -> User:
        """
        Get a user of the hotel.

        Raises:
            NotFoundException: If user not found or belongs to another hotel
        """
        user = self.repo.get_by_id_and_hotel(user_id, hotel_id)
        if not user:
            raise NotFoundException("User not found in this hotel")
        return user

    def create_user(self, hotel_id: int, data: UserCreate) -> User:
        """Create a user holding the given roles of the same hotel"""
        self.hotels.get_hotel(hotel_id)
        roles = self._resolve_roles(hotel_id, data.role_ids)
        user = User(
            hotel_id=hotel_id,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone=data.phone,
        )
        user.roles = roles
        return self.repo.create(user)

    def set_roles(self, hotel_id: int, user_id: int, data: UserRolesUpdate) -> User:
        """Replace the roles a user holds"""
        user = self.get_user(hotel_id, user_id)
        user.roles = self._resolve_roles(hotel_id, data.role_ids)
        return self.repo.update(user)

    def _resolve_roles(self, hotel_id: int, role_ids: list[int]) -> list[Role]:
        """
        Load roles, all of which must belong to the hotel.

        Raises:
            ValidationException: If any id is unknown or from another hotel
        """
        wanted = list(dict.fromkeys(role_ids))
        roles = self.role_repo.get_many(hotel_id, wanted)
        found = {role.id for role in roles}
        missing = [role_id for role_id in wanted if role_id not in found]
        if missing:
            raise ValidationException(f"Roles not found in this hotel: {missing}")
        return roles
