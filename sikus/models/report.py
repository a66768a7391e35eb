"""
report.py

Incident report (laporan) model.

A report belongs to exactly one user (its creator) for its whole
life. Only admins change its status; reports are never deleted.

"""

import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, Text, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sikus.db.base import Base, enum_values, utcnow
from sikus.models.user import User


"""
Report status

Terkirim -> Diterima -> Diproses -> Selesai is the usual order, but an
admin may set any value from any value.

"""

class ReportStatus(str, Enum):
    TERKIRIM = "Terkirim"
    DITERIMA = "Diterima"
    DIPROSES = "Diproses"
    SELESAI = "Selesai"


class Report(Base):
    """Incident report.

    - uraian_kejadian: narrative as submitted (may contain HTML from the editor)
    - tindak_lanjut_ptps / tindak_lanjut_kpps: optional follow-up notes
    """

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    uraian_kejadian: Mapped[str] = mapped_column(Text, nullable=False)
    tindak_lanjut_ptps: Mapped[str | None] = mapped_column(Text, nullable=True)
    tindak_lanjut_kpps: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[ReportStatus] = mapped_column(
        SAEnum(ReportStatus, name="report_status", native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=ReportStatus.TERKIRIM,
        index=True,
    )

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship(User, lazy="joined")
