"""
users.py

Admin user management API.

Main features:
- paginated user list (newest first)
- approval status change (pending <-> approved)
- profile + role update
- account deletion (never your own)

Design principles:
- every endpoint requires an admin token (get_current_admin)
- business rules are delegated to sikus.services.accounts
- password hashes are never returned

Related files:
- sikus.services.accounts  : account workflow
- sikus.schemas.user       : request / response models

"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sikus.core.deps import get_db, get_current_admin, get_page_params, CurrentUser, PageParams
from sikus.schemas.common import Pagination
from sikus.schemas.user import UserStatusUpdate, UserUpdateRequest, UserResponse
from sikus.services.accounts import list_users, update_user_status, update_user, delete_user

router = APIRouter(prefix="/api/users", tags=["users"])


def _user_payload(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.get("")
def get_users(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_admin),
):
    users, total = list_users(db, page=params.page, limit=params.limit)
    return {
        "users": [_user_payload(u) for u in users],
        "pagination": Pagination.build(page=params.page, limit=params.limit, total=total).model_dump(),
    }


"""
Approval status change API

- body {status}: pending / approved
- both directions are allowed

"""

@router.put("/{user_id}/status")
def set_user_status(
    user_id: int,
    body: UserStatusUpdate,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_admin),
):
    user = update_user_status(db, user_id, body.status)
    return {
        "message": "Status user berhasil diperbarui",
        "data": _user_payload(user),
    }


"""
User update API

- full profile + role
- email / nomor PTPS already used by another user -> 400

"""

@router.put("/{user_id}")
def edit_user(
    user_id: int,
    body: UserUpdateRequest,
    db: Session = Depends(get_db),
    _: CurrentUser = Depends(get_current_admin),
):
    user = update_user(db, user_id, body)
    return {
        "message": "User berhasil diperbarui",
        "data": _user_payload(user),
    }


@router.delete("/{user_id}")
def remove_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_admin: CurrentUser = Depends(get_current_admin),
):
    delete_user(db, user_id, current_admin.user_id)
    return {"message": "User berhasil dihapus"}
