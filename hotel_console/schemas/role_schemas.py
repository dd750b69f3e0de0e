from datetime import datetime
from pydantic import BaseModel, Field


class RoleCreate(BaseModel):
    """Create a role in a hotel; the name must be unused in that hotel"""

    name: str = Field(..., min_length=1, max_length=100)


class RoleUpdate(BaseModel):
    """Rename a role"""

    name: str = Field(..., min_length=1, max_length=100)


class RoleResponse(BaseModel):
    """Role details response"""

    id: int
    hotel_id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}
