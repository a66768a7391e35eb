from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from sikus.models.user import Role, AccountStatus


# admin status change request; the value is checked by the service
class UserStatusUpdate(BaseModel):
    status: str


# admin full profile + role update
class UserUpdateRequest(BaseModel):
    nama: str = Field(min_length=1, max_length=255)
    alamat: str = Field(min_length=1, max_length=500)
    jabatan: str = Field(min_length=1, max_length=100)
    nomor_ptps: str = Field(min_length=1, max_length=50)
    kelurahan: str = Field(min_length=1, max_length=100)
    kecamatan: str = Field(min_length=1, max_length=100)
    nomor_hp: str = Field(min_length=1, max_length=30)
    email: EmailStr
    role: Role


# admin user list row
class UserResponse(BaseModel):
    id: int
    nama: str
    alamat: str
    jabatan: str
    nomor_ptps: str
    kelurahan: str
    kecamatan: str
    nomor_hp: str
    email: str
    role: Role
    status: AccountStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
