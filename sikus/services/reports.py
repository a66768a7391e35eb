"""
services/reports.py

Report workflow business logic.

Routers call these functions to submit, list, inspect and triage
incident reports, and to gather dashboard / export data.

Main features:
- report submission (status always starts at Terkirim)
- role-scoped listing with offset pagination, newest first
- admin status change (any status -> any status)
- dashboard counters and date-ranged export rows

Design principles:
- a non-admin only ever sees their own reports; a report that is
  not visible is reported as not found
- the requester identity comes from the token claims (CurrentUser)
- no HTTP / FastAPI dependency

Related files:
- sikus.models.report      : Report / ReportStatus
- sikus.routers.reports    : report API
- sikus.services.export    : xlsx rendering

"""

import datetime
import re

from loguru import logger
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from sikus.core.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from sikus.core.security import TokenClaims
from sikus.models.report import Report, ReportStatus
from sikus.models.user import Role, User
from sikus.services.accounts import count_pending_users
from sikus.services.pagination import paginate

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(value: str | None) -> str:
    if not value:
        return ""
    return _TAG_RE.sub("", value)


def parse_report_status(value) -> ReportStatus:
    try:
        return ReportStatus(value)
    except ValueError:
        raise ValidationError("Status laporan tidak valid")


def _visible_reports(requester: TokenClaims):
    stmt = select(Report)
    if requester.role is not Role.ADMIN:
        stmt = stmt.where(Report.user_id == requester.user_id)
    return stmt


def _optional_text(value: str | None) -> str | None:
    if value is None or not strip_html(value).strip():
        return None
    return value


"""
Report submission

- the token's account must still exist -> UnauthorizedError otherwise
- narrative that is empty once HTML tags and whitespace are removed
  -> ValidationError
- blank follow-up notes are stored as NULL

"""

def submit_report(
    db: Session,
    *,
    user_id: int,
    uraian_kejadian: str,
    tindak_lanjut_ptps: str | None = None,
    tindak_lanjut_kpps: str | None = None,
) -> Report:
    if db.get(User, user_id) is None:
        raise UnauthorizedError("Akun tidak ditemukan")

    if not strip_html(uraian_kejadian).strip():
        raise ValidationError("Uraian kejadian wajib diisi")

    report = Report(
        user_id=user_id,
        uraian_kejadian=uraian_kejadian,
        tindak_lanjut_ptps=_optional_text(tindak_lanjut_ptps),
        tindak_lanjut_kpps=_optional_text(tindak_lanjut_kpps),
        status=ReportStatus.TERKIRIM,
    )
    db.add(report)
    db.commit()
    db.refresh(report)

    logger.info("Report id={} submitted by user id={}", report.id, user_id)
    return report


def list_reports(db: Session, *, requester: TokenClaims, page: int, limit: int) -> tuple[list[Report], int]:
    stmt = _visible_reports(requester).order_by(Report.created_at.desc(), Report.id.desc())
    return paginate(db, stmt, page=page, limit=limit)


def get_report(db: Session, *, requester: TokenClaims, report_id: int) -> Report:
    report = db.scalar(_visible_reports(requester).where(Report.id == report_id))
    if not report:
        raise NotFoundError("Laporan tidak ditemukan")
    return report


"""
Admin status change

- non-admin -> ForbiddenError, report untouched
- value outside Terkirim/Diterima/Diproses/Selesai -> ValidationError
- no ordering between old and new status

"""

def update_report_status(db: Session, *, requester: TokenClaims, report_id: int, new_status) -> Report:
    if requester.role is not Role.ADMIN:
        raise ForbiddenError("Admin access required")

    status = parse_report_status(new_status)

    report = db.get(Report, report_id)
    if not report:
        raise NotFoundError("Laporan tidak ditemukan")

    before = report.status
    report.status = status
    db.commit()
    db.refresh(report)

    logger.info(
        "Report id={} status {} -> {} by admin id={}",
        report.id, before.value, status.value, requester.user_id,
    )
    return report


"""
Dashboard counters

- scoped like list_reports
- pendingUsers only for admins

"""

def report_stats(db: Session, *, requester: TokenClaims) -> dict:
    visible = _visible_reports(requester).subquery()

    rows = db.execute(
        select(visible.c.status, func.count()).group_by(visible.c.status)
    ).all()
    by_status = {ReportStatus(status): count for status, count in rows}

    stats = {
        "totalReports": sum(by_status.values()),
        "pendingReports": by_status.get(ReportStatus.TERKIRIM, 0),
        "completedReports": by_status.get(ReportStatus.SELESAI, 0),
        "pendingUsers": None,
    }
    if requester.role is Role.ADMIN:
        stats["pendingUsers"] = count_pending_users(db)
    return stats


"""
Export rows

- both dates or neither
- end_date is inclusive (whole calendar day, UTC)
- newest first

"""

def reports_for_export(
    db: Session,
    *,
    requester: TokenClaims,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
) -> list[Report]:
    if (start_date is None) != (end_date is None):
        raise ValidationError("Tanggal mulai dan tanggal akhir harus diisi bersamaan")

    stmt = _visible_reports(requester)
    if start_date is not None:
        if start_date > end_date:
            raise ValidationError("Tanggal mulai tidak boleh setelah tanggal akhir")
        start = datetime.datetime.combine(start_date, datetime.time.min, tzinfo=datetime.timezone.utc)
        end = datetime.datetime.combine(end_date + datetime.timedelta(days=1), datetime.time.min, tzinfo=datetime.timezone.utc)
        stmt = stmt.where(Report.created_at >= start, Report.created_at < end)

    stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())
    return list(db.scalars(stmt).all())
