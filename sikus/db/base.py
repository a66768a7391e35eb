"""
base.py

SQLAlchemy ORM Base definition.

Every model (User, Report) inherits from this Base, so table
metadata is collected in one place and Alembic migrations run
against the same metadata.

Design principles:
- Base is defined in exactly one file
- avoids circular imports between models
- keeps Alembic autogenerate stable

Related files:
- sikus.models.*          : all ORM models
- alembic/env.py          : loads the metadata for migrations

"""

import datetime

from sqlalchemy.orm import declarative_base

# base class for all ORM models
Base = declarative_base()


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# store str-Enum columns by value ("pending", "Terkirim"), not by member name
def enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]
