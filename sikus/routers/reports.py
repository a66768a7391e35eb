"""
reports.py

Incident report API.

Main features:
- report submission (any authenticated user)
- report list / detail, scoped by role
- report status change (admin only)
- dashboard counters
- Excel (xlsx) export with an optional date range

Design principles:
- non-admins only see their own reports
- business rules are delegated to sikus.services.reports
- xlsx rendering is delegated to sikus.services.export

Related files:
- sikus.services.reports   : report workflow
- sikus.services.export    : openpyxl workbook
- sikus.schemas.report     : request / response models

"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette.responses import Response

from sikus.core.deps import get_db, get_current_user, get_current_admin, get_page_params, CurrentUser, PageParams
from sikus.core.errors import NotFoundError
from sikus.schemas.common import Pagination
from sikus.schemas.report import ReportCreateRequest, ReportStatusUpdate, ReportResponse, ReportStats
from sikus.services.export import XLSX_MEDIA_TYPE, build_reports_workbook, export_filename
from sikus.services.reports import (
    submit_report,
    list_reports,
    get_report,
    update_report_status,
    report_stats,
    reports_for_export,
)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("")
def create_report(
    body: ReportCreateRequest,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    report = submit_report(
        db,
        user_id=current_user.user_id,
        uraian_kejadian=body.uraian_kejadian,
        tindak_lanjut_ptps=body.tindak_lanjut_ptps,
        tindak_lanjut_kpps=body.tindak_lanjut_kpps,
    )
    return {
        "message": "Laporan berhasil dikirim",
        "data": {
            "id": report.id,
            "status": report.status.value,
        },
    }


"""
Report list API

- admin: every report / user: own reports only
- newest first, offset pagination (page, limit)

"""

@router.get("")
def get_reports(
    params: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    reports, total = list_reports(db, requester=current_user, page=params.page, limit=params.limit)
    return {
        "reports": [ReportResponse.from_report(r).model_dump(mode="json") for r in reports],
        "pagination": Pagination.build(page=params.page, limit=params.limit, total=total).model_dump(),
    }


@router.get("/stats")
def get_report_stats(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    stats = report_stats(db, requester=current_user)
    return {"stats": ReportStats(**stats).model_dump(exclude_none=True)}


"""
Report Excel export API

- same visibility as the list
- start_date / end_date (YYYY-MM-DD) are optional but go together
- nothing to export -> 404

"""

@router.get("/export.xlsx")
def export_reports_xlsx(
    start_date: Optional[datetime.date] = Query(None, description="e.g. 2024-02-01"),
    end_date: Optional[datetime.date] = Query(None, description="e.g. 2024-02-29"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    reports = reports_for_export(db, requester=current_user, start_date=start_date, end_date=end_date)
    if not reports:
        raise NotFoundError("Tidak ada laporan dalam rentang tanggal yang dipilih")

    filename = export_filename(start_date, end_date)
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"'
    }
    return Response(
        content=build_reports_workbook(reports),
        media_type=XLSX_MEDIA_TYPE,
        headers=headers,
    )


@router.get("/{report_id}")
def get_report_detail(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    report = get_report(db, requester=current_user, report_id=report_id)
    return {"report": ReportResponse.from_report(report).model_dump(mode="json")}


"""
Report status change API (admin only)

- body {status}: Terkirim / Diterima / Diproses / Selesai
- any status can be set from any status

"""

@router.put("/{report_id}/status")
def set_report_status(
    report_id: int,
    body: ReportStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: CurrentUser = Depends(get_current_admin),
):
    report = update_report_status(db, requester=current_admin, report_id=report_id, new_status=body.status)
    return {
        "message": "Status laporan berhasil diperbarui",
        "data": {
            "id": report.id,
            "status": report.status.value,
        },
    }
