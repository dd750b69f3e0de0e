"""Repository for Hotel model operations."""

from sqlalchemy.orm import Session
from hotel_console.models.hotel import Hotel


class HotelRepository:
    """Repository for Hotel model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, hotel_id: int) -> Hotel | None:
        """Get hotel by ID"""
        return self.db.query(Hotel).filter(Hotel.id == hotel_id).first()

    def get_all(self) -> list[Hotel]:
        """Get all hotels ordered by name"""
        return self.db.query(Hotel).order_by(Hotel.name.asc(), Hotel.id.asc()).all()

    def create(self, hotel: Hotel) -> Hotel:
        """Create a new hotel"""
        self.db.add(hotel)
        self.db.commit()
        self.db.refresh(hotel)
        return hotel
