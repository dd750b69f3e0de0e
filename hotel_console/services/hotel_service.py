from sqlalchemy.orm import Session
from hotel_console.models.hotel import Hotel
from hotel_console.repositories.hotel_repository import HotelRepository
from hotel_console.schemas.hotel_schemas import HotelCreate
from hotel_console.core.exceptions import NotFoundException


class HotelService:
    """Service for hotel registration and lookup"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = HotelRepository(db)

    def create_hotel(self, data: HotelCreate) -> Hotel:
        """Register a new hotel"""
        return self.repo.create(Hotel(**data.model_dump()))

    def list_hotels(self) -> list[Hotel]:
        return self.repo.get_all()

    def get_hotel(self, hotel_id: int) -> Hotel:
        """
        Get hotel by id.

        Raises:
            NotFoundException: If hotel does not exist
        """
        hotel = self.repo.get_by_id(hotel_id)
        if not hotel:
            raise NotFoundException("Hotel not found")
        return hotel
