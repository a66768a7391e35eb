"""
user.py

User account model with its Role and AccountStatus enums.

Every PTPS officer and administrator is one row here. Authentication,
approval, and report ownership all hang off this model.

"""

import datetime
from enum import Enum

from sqlalchemy import String, Integer, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from sikus.db.base import Base, enum_values, utcnow


"""
User role

- USER  : PTPS field officer
- ADMIN : administrator (approves accounts, triages reports)

"""

class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


"""
Account approval status

- PENDING  : registered, waiting for an admin (cannot log in)
- APPROVED : approved by an admin

An admin may move an account in either direction.

"""

class AccountStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"


"""
User model

- email / nomor_ptps are unique (schema-level UNIQUE constraints)
- password_hash holds the bcrypt hash only
- new accounts start as role=user, status=pending

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    nama: Mapped[str] = mapped_column(String(255), nullable=False)
    alamat: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    jabatan: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    nomor_ptps: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    kelurahan: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    kecamatan: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    nomor_hp: Mapped[str] = mapped_column(String(30), nullable=False, default="")

    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=Role.USER,
    )
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(AccountStatus, name="account_status", native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=AccountStatus.PENDING,
        index=True,
    )

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
