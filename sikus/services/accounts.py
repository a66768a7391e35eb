"""
services/accounts.py

Account workflow business logic.

Routers call these functions for registration, login and every
admin-side account operation. No HTTP / FastAPI dependency here:
rule violations are raised as sikus.core.errors exceptions and the
routers/handlers turn them into responses.

Main features:
- self-registration (status=pending, role=user)
- login (approval status checked before the password)
- admin user list / status change / profile+role update / delete

Design principles:
- email and nomor_ptps uniqueness is pre-checked, and the schema
  UNIQUE constraints catch the concurrent case (IntegrityError)
- an admin can never delete their own account
- pending <-> approved are both allowed

Related files:
- sikus.models.user        : User / Role / AccountStatus
- sikus.core.security      : password hashing / token issue
- sikus.routers.auth       : register / login / me
- sikus.routers.users      : admin user management

"""

from loguru import logger
from sqlalchemy import select, or_, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sikus.core.config import Settings
from sikus.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from sikus.core.security import get_password_hash, verify_password, create_access_token
from sikus.models.report import Report
from sikus.models.user import User, Role, AccountStatus
from sikus.schemas.auth import RegisterRequest
from sikus.schemas.user import UserUpdateRequest
from sikus.services.pagination import paginate

PROFILE_FIELDS = ("nama", "alamat", "jabatan", "nomor_ptps", "kelurahan", "kecamatan", "nomor_hp", "email")


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email))


"""
Users holding the given email or nomor_ptps

- exclude_id skips the user being edited

"""

def find_users_by_email_or_nomor_ptps(
    db: Session, email: str, nomor_ptps: str, *, exclude_id: int | None = None
) -> list[User]:
    stmt = select(User).where(or_(User.email == email, User.nomor_ptps == nomor_ptps))
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return list(db.scalars(stmt).all())


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User tidak ditemukan")
    return user


def parse_account_status(value) -> AccountStatus:
    try:
        return AccountStatus(value)
    except ValueError:
        raise ValidationError("Status user tidak valid")


def _commit_unique(db: Session, message: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(message)


"""
Self-registration

- duplicate email or nomor_ptps -> ConflictError, nothing inserted
- password stored as a bcrypt hash
- always status=pending, role=user

"""

def register_user(db: Session, data: RegisterRequest) -> User:
    if find_users_by_email_or_nomor_ptps(db, data.email, data.nomor_ptps):
        raise ConflictError("Email atau Nomor PTPS sudah terdaftar")

    user = User(
        nama=data.nama,
        alamat=data.alamat,
        jabatan=data.jabatan,
        nomor_ptps=data.nomor_ptps,
        kelurahan=data.kelurahan,
        kecamatan=data.kecamatan,
        nomor_hp=data.nomor_hp,
        email=data.email,
        password_hash=get_password_hash(data.password),
        role=Role.USER,
        status=AccountStatus.PENDING,
    )
    db.add(user)
    _commit_unique(db, "Email atau Nomor PTPS sudah terdaftar")
    db.refresh(user)

    logger.info("Registered user id={} nomor_ptps={} (pending approval)", user.id, user.nomor_ptps)
    return user


"""
Login

- unknown email and wrong password share one message
- an unapproved account is rejected before the password is compared
- returns (token, user)

"""

def authenticate(db: Session, email: str, password: str, settings: Settings) -> tuple[str, User]:
    user = find_user_by_email(db, email)
    if not user:
        logger.warning("Login rejected: unknown email")
        raise AuthError("Email atau password salah")

    if user.status is not AccountStatus.APPROVED:
        logger.warning("Login rejected: user id={} not approved", user.id)
        raise AuthError("Akun Anda belum disetujui admin")

    if not verify_password(password, user.password_hash):
        logger.warning("Login rejected: wrong password for user id={}", user.id)
        raise AuthError("Email atau password salah")

    token = create_access_token(user.id, user.role, settings)
    return token, user


def list_users(db: Session, *, page: int, limit: int) -> tuple[list[User], int]:
    stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
    return paginate(db, stmt, page=page, limit=limit)


def count_pending_users(db: Session) -> int:
    return db.scalar(
        select(func.count()).select_from(User).where(User.status == AccountStatus.PENDING)
    ) or 0


def update_user_status(db: Session, user_id: int, new_status) -> User:
    status = parse_account_status(new_status)
    user = get_user(db, user_id)

    before = user.status
    user.status = status
    db.commit()
    db.refresh(user)

    logger.info("User id={} status {} -> {}", user.id, before.value, status.value)
    return user


"""
Admin profile + role update

- email / nomor_ptps must not belong to another user
- password is not touched

"""

def update_user(db: Session, user_id: int, data: UserUpdateRequest) -> User:
    user = get_user(db, user_id)

    if find_users_by_email_or_nomor_ptps(db, data.email, data.nomor_ptps, exclude_id=user.id):
        raise ConflictError("Email atau Nomor PTPS sudah digunakan oleh user lain")

    for field in PROFILE_FIELDS:
        setattr(user, field, getattr(data, field))
    user.role = data.role

    _commit_unique(db, "Email atau Nomor PTPS sudah digunakan oleh user lain")
    db.refresh(user)

    logger.info("User id={} updated (role={})", user.id, user.role.value)
    return user


"""
Admin account deletion

- deleting yourself -> ValidationError
- a user who still owns reports cannot be removed (reports are kept)

"""

def delete_user(db: Session, user_id: int, requester_id: int) -> None:
    if user_id == requester_id:
        raise ValidationError("Tidak dapat menghapus akun sendiri")

    user = get_user(db, user_id)

    owned = db.scalar(select(func.count()).select_from(Report).where(Report.user_id == user.id)) or 0
    if owned:
        raise ConflictError("User masih memiliki laporan dan tidak dapat dihapus")

    db.delete(user)
    db.commit()

    logger.info("User id={} deleted by admin id={}", user_id, requester_id)
