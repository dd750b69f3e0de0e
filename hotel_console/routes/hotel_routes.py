from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hotel_console.database import get_db
from hotel_console.dependencies import get_current_operator
from hotel_console.services.hotel_service import HotelService
from hotel_console.services.role_service import RoleService
from hotel_console.services.user_service import UserService
from hotel_console.schemas.hotel_schemas import HotelCreate, HotelResponse
from hotel_console.schemas.role_schemas import RoleCreate, RoleUpdate, RoleResponse
from hotel_console.schemas.user_schemas import UserCreate, UserRolesUpdate, UserResponse

router = APIRouter()


@router.get("", response_model=list[HotelResponse])
async def list_hotels(operator: str = Depends(get_current_operator), db: Session = Depends(get_db)):
    """List all hotels"""
    return HotelService(db).list_hotels()


@router.post("", response_model=HotelResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel(
    data: HotelCreate, operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """Register a hotel"""
    return HotelService(db).create_hotel(data)


@router.get("/{hotel_id}", response_model=HotelResponse)
async def get_hotel(
    hotel_id: int, operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """Get hotel details"""
    return HotelService(db).get_hotel(hotel_id)


# Roles


@router.get("/{hotel_id}/roles", response_model=list[RoleResponse])
async def list_roles(
    hotel_id: int, operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """List the roles of a hotel"""
    return RoleService(db).list_roles(hotel_id)


@router.post("/{hotel_id}/roles", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    hotel_id: int,
    data: RoleCreate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """
    Create a role.

    - Role names are unique within a hotel
    - The same name may exist in other hotels as an unrelated role
    """
    return RoleService(db).create_role(hotel_id, data)


@router.patch("/{hotel_id}/roles/{role_id}", response_model=RoleResponse)
async def rename_role(
    hotel_id: int,
    role_id: int,
    data: RoleUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Rename a role; grants saved under the old name are not carried over"""
    return RoleService(db).rename_role(hotel_id, role_id, data)


@router.delete("/{hotel_id}/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    hotel_id: int,
    role_id: int,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Delete a role; its stored grants are left in place"""
    RoleService(db).delete_role(hotel_id, role_id)
    return None


# Users


@router.get("/{hotel_id}/users", response_model=list[UserResponse])
async def list_users(
    hotel_id: int, operator: str = Depends(get_current_operator), db: Session = Depends(get_db)
):
    """List the users of a hotel"""
    return UserService(db).list_users(hotel_id)


@router.post("/{hotel_id}/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    hotel_id: int,
    data: UserCreate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Create a user; every role id must belong to this hotel"""
    return UserService(db).create_user(hotel_id, data)


@router.get("/{hotel_id}/users/{user_id}", response_model=UserResponse)
async def get_user(
    hotel_id: int,
    user_id: int,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Get user details"""
    return UserService(db).get_user(hotel_id, user_id)


@router.put("/{hotel_id}/users/{user_id}/roles", response_model=UserResponse)
async def set_user_roles(
    hotel_id: int,
    user_id: int,
    data: UserRolesUpdate,
    operator: str = Depends(get_current_operator),
    db: Session = Depends(get_db),
):
    """Replace the roles a user holds"""
    return UserService(db).set_roles(hotel_id, user_id, data)
