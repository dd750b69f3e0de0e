from pydantic import BaseModel, Field

from hotel_console.models.privilege import PrivilegeFlag
from hotel_console.schemas.catalog_schemas import PageResponse


class PagePrivilegeSchema(BaseModel):
    """Read/write/maintain flags of one page"""

    read: bool = False
    write: bool = False
    maintain: bool = False

    model_config = {"from_attributes": True}


# Whole documents. `version` on an update is optional: when given, the save
# is rejected unless it matches the stored version; when omitted the last
# write wins.


class HotelPrivilegesDocument(BaseModel):
    """Entitled page ids per hotel"""

    version: int
    data: dict[str, list[str]]


class HotelPrivilegesUpdate(BaseModel):
    version: int | None = Field(None, ge=0)
    data: dict[str, list[str]]


class RolePrivilegesDocument(BaseModel):
    """Grants per hotel, role name and page"""

    version: int
    data: dict[str, dict[str, dict[str, PagePrivilegeSchema]]]


class RolePrivilegesUpdate(BaseModel):
    version: int | None = Field(None, ge=0)
    data: dict[str, dict[str, dict[str, PagePrivilegeSchema]]]


class UserPrivilegesDocument(BaseModel):
    """Overrides per hotel, role name, user and page"""

    version: int
    data: dict[str, dict[str, dict[str, dict[str, PagePrivilegeSchema]]]]


class UserPrivilegesUpdate(BaseModel):
    version: int | None = Field(None, ge=0)
    data: dict[str, dict[str, dict[str, dict[str, PagePrivilegeSchema]]]]


# Single edits applied server-side (load, change, save)


class EntitlementUpdate(BaseModel):
    """Switch one page on or off for a hotel"""

    page_id: str = Field(..., min_length=1)
    enabled: bool
    version: int | None = Field(None, ge=0)


class PrivilegeToggle(BaseModel):
    """Flip one flag of a grant or override"""

    page_id: str = Field(..., min_length=1)
    flag: PrivilegeFlag
    version: int | None = Field(None, ge=0)


class EntitlementResponse(BaseModel):
    hotel_id: str
    page_id: str
    enabled: bool
    version: int


class ToggleResponse(BaseModel):
    hotel_id: str
    page_id: str
    privilege: PagePrivilegeSchema
    version: int


# Matrices shown by the settings screens


class EntitlementRow(PageResponse):
    enabled: bool


class EntitlementMatrixResponse(BaseModel):
    hotel_id: str
    version: int
    pages: list[EntitlementRow]
    total: int


class GrantRow(PageResponse):
    privilege: PagePrivilegeSchema


class GrantMatrixResponse(BaseModel):
    hotel_id: str
    role_name: str
    version: int
    pages: list[GrantRow]
    total: int
    page: int
    page_size: int


class OverrideRow(PageResponse):
    privilege: PagePrivilegeSchema = Field(..., description="Effective privilege in this role")
    role_grant: PagePrivilegeSchema
    override: PagePrivilegeSchema | None = None


class OverrideMatrixResponse(BaseModel):
    hotel_id: str
    role_name: str
    user_id: str
    version: int
    pages: list[OverrideRow]
    total: int
    page: int
    page_size: int


class MergedPrivilegesResponse(BaseModel):
    """Read-only OR of all role grants a user holds in a hotel"""

    hotel_id: str
    user_id: str
    role_names: list[str]
    pages: dict[str, PagePrivilegeSchema]


class AccessCheckResponse(BaseModel):
    hotel_id: str
    user_id: str
    page_id: str
    flag: PrivilegeFlag
    allowed: bool
