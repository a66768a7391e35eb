"""

Initial admin account creation script.

- run once when the server is first set up
- registration only ever creates pending "user" accounts, so the
  first approved admin has to be created here
- reads ADMIN_* variables from .env (plus DATABASE_URL / SECRET_KEY)
- does nothing if an admin account already exists

Usage
- activate the virtualenv
- (.venv) ~/backend$ python -m scripts.create_admin

"""

import os
from dotenv import load_dotenv
load_dotenv()

from loguru import logger
from sqlalchemy import select, or_

from sikus.core.config import Settings
from sikus.core.security import get_password_hash
from sikus.db.session import build_engine, build_session_factory
from sikus.models.user import User, Role, AccountStatus


def main():
    settings = Settings()
    engine = build_engine(settings.DATABASE_URL)
    db = build_session_factory(engine)()
    try:
        exists = db.scalar(
            select(User).where(User.role == Role.ADMIN)
        )
        if exists:
            logger.info("Admin already exists (id={}). Skip creation.", exists.id)
            return

        email = os.environ["ADMIN_EMAIL"]
        password = os.environ["ADMIN_PASSWORD"]
        nama = os.environ.get("ADMIN_NAMA", "Administrator")
        nomor_ptps = os.environ.get("ADMIN_NOMOR_PTPS", "ADMIN-0000")

        taken = db.scalar(
            select(User).where(or_(User.email == email, User.nomor_ptps == nomor_ptps))
        )
        if taken:
            raise RuntimeError("Email or nomor PTPS already used by a non-admin account")

        user = User(
            email=email,
            password_hash=get_password_hash(password),
            nama=nama,
            alamat=os.environ.get("ADMIN_ALAMAT", "-"),
            jabatan=os.environ.get("ADMIN_JABATAN", "Admin"),
            nomor_ptps=nomor_ptps,
            kelurahan=os.environ.get("ADMIN_KELURAHAN", "-"),
            kecamatan=os.environ.get("ADMIN_KECAMATAN", "-"),
            nomor_hp=os.environ.get("ADMIN_NOMOR_HP", "-"),
            role=Role.ADMIN,
            status=AccountStatus.APPROVED,
        )

        db.add(user)
        db.commit()

        logger.info("Admin created: {}", email)

    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
