"""
auth.py

Authentication API.

Registration, login, logout and "who am I" for PTPS officers and
admins. Tokens are stateless JWT access tokens carried in the
Authorization header (Bearer).

Main features:
- self-registration (waits for admin approval)
- login and token issue
- logout (no server-side state; the client drops the token)
- current user lookup

Design principles:
- business rules live in sikus.services.accounts
- this router only maps requests/responses
- the password hash never leaves the server

Related files:
- sikus.services.accounts  : register / authenticate / get_user
- sikus.core.deps          : get_current_user guard
- sikus.schemas.auth       : request / response models

"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sikus.core.config import Settings
from sikus.core.deps import get_db, get_settings, get_current_user, CurrentUser
from sikus.schemas.auth import RegisterRequest, LoginRequest, UserPublic
from sikus.services.accounts import register_user, authenticate, get_user

router = APIRouter(prefix="/api", tags=["auth"])


"""
Registration API

- duplicate email or nomor PTPS -> 400
- new account is pending until an admin approves it

"""

@router.post("/register")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(db, data)
    return {
        "message": "Registrasi berhasil. Menunggu persetujuan admin.",
        "data": {
            "id": user.id,
            "email": user.email,
        },
    }


"""
Login API

- pending accounts are rejected
- returns the access token plus a public user projection

"""

@router.post("/login")
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    token, user = authenticate(db, data.email, data.password, settings)
    return {
        "message": "Login berhasil",
        "token": token,
        "user": UserPublic.model_validate(user).model_dump(mode="json"),
    }


# JWT is stateless, nothing to invalidate server-side
@router.post("/logout")
def logout(_: CurrentUser = Depends(get_current_user)):
    return {"message": "Logout berhasil"}


@router.get("/auth/me")
def me(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    user = get_user(db, current_user.user_id)
    return {"user": UserPublic.model_validate(user).model_dump(mode="json")}
