from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hotel_console.database import get_db
from hotel_console.dependencies import get_current_operator
from hotel_console.models.privilege import PrivilegeFlag
from hotel_console.models.privilege_document import PrivilegeResource
from hotel_console.services.privilege_service import PrivilegeService
from hotel_console.schemas.privilege_schemas import (
    AccessCheckResponse,
    EntitlementMatrixResponse,
    EntitlementResponse,
    EntitlementUpdate,
    GrantMatrixResponse,
    HotelPrivilegesDocument,
    HotelPrivilegesUpdate,
    MergedPrivilegesResponse,
    OverrideMatrixResponse,
    PrivilegeToggle,
    RolePrivilegesDocument,
    RolePrivilegesUpdate,
    ToggleResponse,
    UserPrivilegesDocument,
    UserPrivilegesUpdate,
)

router = APIRouter()


# Whole documents (GET whole resource, PUT bulk replace)


@router.get("/hotels", response_model=HotelPrivilegesDocument)
async def get_hotel_privileges(
    operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """Entitled pages of every hotel"""
    return PrivilegeService(db).get_document(PrivilegeResource.HOTEL_PRIVILEGES)


@router.put("/hotels", response_model=HotelPrivilegesDocument)
async def save_hotel_privileges(
    body: HotelPrivilegesUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """
    Replace the hotel entitlement document.

    - Send the `version` you loaded to reject the save if someone else saved first
    - Without `version` the last save wins
    """
    return PrivilegeService(db).replace_document(
        PrivilegeResource.HOTEL_PRIVILEGES, body.data, body.version
    )


@router.get("/roles", response_model=RolePrivilegesDocument)
async def get_role_privileges(
    operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """Role grants of every hotel"""
    return PrivilegeService(db).get_document(PrivilegeResource.HOTEL_ROLE_PRIVILEGES)


@router.put("/roles", response_model=RolePrivilegesDocument)
async def save_role_privileges(
    body: RolePrivilegesUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Replace the role grant document"""
    return PrivilegeService(db).replace_document(
        PrivilegeResource.HOTEL_ROLE_PRIVILEGES, body.model_dump()["data"], body.version
    )


@router.get("/users", response_model=UserPrivilegesDocument)
async def get_user_privileges(
    operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """User overrides of every hotel"""
    return PrivilegeService(db).get_document(PrivilegeResource.USER_PRIVILEGES)


@router.put("/users", response_model=UserPrivilegesDocument)
async def save_user_privileges(
    body: UserPrivilegesUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Replace the user override document"""
    return PrivilegeService(db).replace_document(
        PrivilegeResource.USER_PRIVILEGES, body.model_dump()["data"], body.version
    )


# Hotel entitlements


@router.get("/hotels/{hotel_id}/pages", response_model=EntitlementMatrixResponse)
async def get_entitlement_matrix(
    hotel_id: int, operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """Every assignable page with whether the hotel has it enabled"""
    return PrivilegeService(db).entitlement_matrix(hotel_id)


@router.post("/hotels/{hotel_id}/pages", response_model=EntitlementResponse)
async def set_entitlement(
    hotel_id: int,
    body: EntitlementUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """
    Enable or disable a page for a hotel.

    Disabling keeps the page's role grants and user overrides; they apply
    again once the page is re-enabled.
    """
    return PrivilegeService(db).set_entitlement(hotel_id, body.page_id, body.enabled, body.version)


# Role grants


@router.get("/hotels/{hotel_id}/roles/{role_name}/pages", response_model=GrantMatrixResponse)
async def get_role_matrix(
    hotel_id: int,
    role_name: str,
    search: str | None = Query(None, description="Match on page label or path"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Grants of a role on the pages enabled for its hotel"""
    return PrivilegeService(db).role_matrix(hotel_id, role_name, search, page, page_size)


@router.post("/hotels/{hotel_id}/roles/{role_name}/toggle", response_model=ToggleResponse)
async def toggle_role_grant(
    hotel_id: int,
    role_name: str,
    body: PrivilegeToggle,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Flip one flag of a role's grant on a page"""
    return PrivilegeService(db).toggle_role_grant(
        hotel_id, role_name, body.page_id, body.flag, body.version
    )


# User overrides


@router.get(
    "/hotels/{hotel_id}/roles/{role_name}/users/{user_id}/pages",
    response_model=OverrideMatrixResponse,
)
async def get_user_matrix(
    hotel_id: int,
    role_name: str,
    user_id: int,
    search: str | None = Query(None, description="Match on page label or path"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Effective privileges of a user in one role, with any override shown"""
    return PrivilegeService(db).user_matrix(hotel_id, role_name, user_id, search, page, page_size)


@router.post(
    "/hotels/{hotel_id}/roles/{role_name}/users/{user_id}/toggle",
    response_model=ToggleResponse,
)
async def toggle_user_override(
    hotel_id: int,
    role_name: str,
    user_id: int,
    body: PrivilegeToggle,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Flip one flag of a user's override; a new override starts from all-false"""
    return PrivilegeService(db).toggle_user_override(
        hotel_id, role_name, user_id, body.page_id, body.flag, body.version
    )


# Resolution


@router.get("/hotels/{hotel_id}/users/{user_id}/merged", response_model=MergedPrivilegesResponse)
async def get_merged_privileges(
    hotel_id: int,
    user_id: int,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Read-only summary: OR of the grants of every role the user holds"""
    return PrivilegeService(db).merged_view(hotel_id, user_id)


@router.get("/hotels/{hotel_id}/users/{user_id}/access", response_model=AccessCheckResponse)
async def check_access(
    hotel_id: int,
    user_id: int,
    page_id: str | None = Query(None),
    flag: PrivilegeFlag | None = Query(None),
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Can the user perform `flag` on `page_id` in this hotel?"""
    return PrivilegeService(db).check_access(hotel_id, user_id, page_id, flag)
