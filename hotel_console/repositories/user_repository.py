from sqlalchemy.orm import Session
from hotel_console.models.user import User


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_hotel(self, hotel_id: int) -> list[User]:
        """Get all users of a hotel"""
        return (
            self.db.query(User)
            .filter(User.hotel_id == hotel_id)
            .order_by(User.last_name.asc(), User.first_name.asc(), User.id.asc())
            .all()
        )

    def get_by_id_and_hotel(self, user_id: int, hotel_id: int) -> User | None:
        """Get user ensuring they belong to the hotel"""
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.hotel_id == hotel_id)
            .first()
        )

    def create(self, user: User) -> User:
        """Create new user"""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        """Update existing user"""
        self.db.commit()
        self.db.refresh(user)
        return user
