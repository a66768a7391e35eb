"""
services/export.py

Excel (xlsx) rendering of incident reports with openpyxl.

- one sheet "Laporan PTPS", one row per report
- bold, grey-filled header row
- HTML tags removed from the narrative
- text cells always stored as plain strings, XML-illegal characters dropped
- created_at written as a local-style "dd/mm/yyyy HH.MM.SS" string

"""

import datetime
import io
from typing import Iterable

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from sikus.models.report import Report
from sikus.services.reports import strip_html

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_TITLE = "Laporan PTPS"

# (header, width)
COLUMNS = [
    ("ID", 10),
    ("Nama PTPS", 25),
    ("Nomor PTPS", 15),
    ("Kelurahan", 20),
    ("Kecamatan", 20),
    ("Uraian Kejadian", 40),
    ("Tindak Lanjut PTPS", 30),
    ("Tindak Lanjut KPPS", 30),
    ("Status", 15),
    ("Tanggal Dibuat", 20),
]

HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD3D3D3")


def format_created_at(value: datetime.datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y %H.%M.%S")


def export_filename(start_date: datetime.date | None = None, end_date: datetime.date | None = None) -> str:
    date_range = f"-{start_date.isoformat()}-{end_date.isoformat()}" if start_date and end_date else ""
    return f"laporan-ptps{date_range}.xlsx"


def cell_text(value: str | None) -> str:
    # control characters are not allowed in worksheet XML
    if not value:
        return ""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def report_row(report: Report) -> list:
    author = report.author
    return [
        report.id,
        cell_text(author.nama),
        cell_text(author.nomor_ptps),
        cell_text(author.kelurahan),
        cell_text(author.kecamatan),
        cell_text(strip_html(report.uraian_kejadian)),
        cell_text(report.tindak_lanjut_ptps),
        cell_text(report.tindak_lanjut_kpps),
        report.status.value,
        format_created_at(report.created_at),
    ]


def build_reports_workbook(reports: Iterable[Report]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append([header for header, _ in COLUMNS])
    for idx, (_, width) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    for report in reports:
        ws.append(report_row(report))
        # user text is data; "=..." must not become a formula
        for cell in ws[ws.max_row]:
            if isinstance(cell.value, str):
                cell.data_type = "s"

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
