from datetime import datetime
from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for creating a hotel staff user"""

    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=255)
    phone: str | None = Field(None, max_length=50)
    role_ids: list[int] = Field(default_factory=list, description="Roles of the same hotel")


class UserRolesUpdate(BaseModel):
    """Replace the set of roles a user holds"""

    role_ids: list[int] = Field(default_factory=list)


class UserResponse(BaseModel):
    """User details with held role ids"""

    id: int
    hotel_id: int
    first_name: str
    last_name: str
    email: str
    phone: str | None
    role_ids: list[int]
    created_at: datetime

    model_config = {"from_attributes": True}
