from datetime import datetime
from pydantic import BaseModel, Field


class HotelCreate(BaseModel):
    """Schema for registering a hotel"""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=120)
    country: str | None = Field(None, max_length=120)
    email: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=255)


class HotelResponse(BaseModel):
    """Hotel details response"""

    id: int
    name: str
    address: str | None
    city: str | None
    country: str | None
    email: str | None
    phone_number: str | None
    website: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
