"""
session.py

Database engine and session factory.

create_app() builds one Engine and one session factory from the
Settings object and keeps them on app.state; the get_db dependency
opens and closes a session per request.

Design principles:
- connection setup is defined in one place
- session open/close responsibility stays in get_db
- pool_pre_ping=True to survive idle connection drops
- foreign keys enforced on SQLite as on the server databases

Related files:
- sikus.core.config        : DATABASE_URL
- sikus.core.deps          : get_db dependency
- sikus.main               : engine lifecycle

"""

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    # FastAPI runs sync endpoints in a threadpool
    if make_url(database_url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False

    # pool_pre_ping=True:
    #   detects connections dropped while idle and reconnects
    engine = create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )

    # SQLite enforces FOREIGN KEY constraints only when asked, per connection
    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def ping(engine: Engine) -> int:
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar_one()
