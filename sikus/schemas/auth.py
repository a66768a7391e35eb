from pydantic import BaseModel, ConfigDict, EmailStr, Field

from sikus.models.user import Role


class RegisterRequest(BaseModel):
    nama: str = Field(min_length=1, max_length=255)
    alamat: str = Field(min_length=1, max_length=500)
    jabatan: str = Field(min_length=1, max_length=100)
    nomor_ptps: str = Field(min_length=1, max_length=50)
    kelurahan: str = Field(min_length=1, max_length=100)
    kecamatan: str = Field(min_length=1, max_length=100)
    nomor_hp: str = Field(min_length=1, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

# public projection returned by login and /auth/me (never the hash)
class UserPublic(BaseModel):
    id: int
    email: str
    role: Role
    nama: str

    model_config = ConfigDict(from_attributes=True)
