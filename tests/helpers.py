# tests/helpers.py
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import select, func

from sikus.models.report import Report
from sikus.models.user import User, Role, AccountStatus
from sikus.core.security import get_password_hash


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_payload(**overrides) -> dict:
    suffix = uuid.uuid4().hex[:6]
    data = {
        "nama": "PTPS Uji",
        "alamat": "Jl. Merdeka No. 1",
        "jabatan": "PTPS",
        "nomor_ptps": f"PTPS-{suffix}",
        "kelurahan": "Sukamaju",
        "kecamatan": "Cibeunying",
        "nomor_hp": "081234567890",
        "email": f"ptps_{suffix}@test.com",
        "password": "PtpsPassw0rd!",
    }
    data.update(overrides)
    return data


def create_admin_in_db(db: Session, *, email: str, password: str) -> User:
    admin = User(
        email=email,
        password_hash=get_password_hash(password),
        nama="ADMIN",
        alamat="-",
        jabatan="Admin",
        nomor_ptps=f"ADMIN-{uuid.uuid4().hex[:8]}",
        kelurahan="-",
        kecamatan="-",
        nomor_hp="-",
        role=Role.ADMIN,
        status=AccountStatus.APPROVED,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def login_token(client, email: str, password: str) -> str:
    r = client.post("/api/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def setup_admin(client, db: Session) -> dict:
    admin_email = f"admin_{uuid.uuid4().hex[:6]}@test.com"
    admin_password = "AdminPassw0rd!"
    admin = create_admin_in_db(db, email=admin_email, password=admin_password)
    return {
        "admin_id": admin.id,
        "admin_email": admin_email,
        "admin_password": admin_password,
        "admin_token": login_token(client, admin_email, admin_password),
    }


def register_and_approve(client, admin_token: str, **overrides) -> dict:
    """
    register a PTPS user, approve it as admin, log it in
    """
    payload = register_payload(**overrides)
    reg = client.post("/api/register", json=payload)
    assert reg.status_code == 200, reg.text
    user_id = reg.json()["data"]["id"]

    approve = client.put(
        f"/api/users/{user_id}/status",
        headers=auth_header(admin_token),
        json={"status": "approved"},
    )
    assert approve.status_code == 200, approve.text

    return {
        "user_id": user_id,
        "user_email": payload["email"],
        "user_password": payload["password"],
        "user_nomor_ptps": payload["nomor_ptps"],
        "user_token": login_token(client, payload["email"], payload["password"]),
    }


def setup_admin_and_user(client, db: Session) -> dict:
    """
    ADMIN token + approved PTPS user (user_id, token, nomor_ptps)
    """
    ctx = setup_admin(client, db)
    ctx.update(register_and_approve(client, ctx["admin_token"]))
    return ctx


def submit(client, token: str, text: str = "<p>Kotak suara rusak</p>", **extra):
    r = client.post("/api/reports", headers=auth_header(token), json={"uraian_kejadian": text, **extra})
    assert r.status_code == 200, r.text
    return r.json()["data"]["id"]


def count_users(db: Session) -> int:
    db.expire_all()
    return db.scalar(select(func.count()).select_from(User))


def get_report(db: Session, report_id: int) -> Report:
    db.expire_all()
    return db.get(Report, report_id)
