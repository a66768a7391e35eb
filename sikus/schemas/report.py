from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from sikus.models.report import ReportStatus


class ReportCreateRequest(BaseModel):
    uraian_kejadian: str
    tindak_lanjut_ptps: Optional[str] = None
    tindak_lanjut_kpps: Optional[str] = None


# status value is checked by the service so the admin guard runs first
class ReportStatusUpdate(BaseModel):
    status: str


class ReportResponse(BaseModel):
    """Report row joined with its author's PTPS identity."""

    id: int
    user_id: int
    uraian_kejadian: str
    tindak_lanjut_ptps: Optional[str]
    tindak_lanjut_kpps: Optional[str]
    status: ReportStatus
    created_at: datetime
    updated_at: datetime

    nama: str
    nomor_ptps: str
    kelurahan: str
    kecamatan: str

    @classmethod
    def from_report(cls, report) -> "ReportResponse":
        author = report.author
        return cls(
            id=report.id,
            user_id=report.user_id,
            uraian_kejadian=report.uraian_kejadian,
            tindak_lanjut_ptps=report.tindak_lanjut_ptps,
            tindak_lanjut_kpps=report.tindak_lanjut_kpps,
            status=report.status,
            created_at=report.created_at,
            updated_at=report.updated_at,
            nama=author.nama,
            nomor_ptps=author.nomor_ptps,
            kelurahan=author.kelurahan,
            kecamatan=author.kecamatan,
        )


class ReportStats(BaseModel):
    totalReports: int
    pendingReports: int
    completedReports: int
    pendingUsers: Optional[int] = None
