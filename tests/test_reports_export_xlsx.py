"""

Report Excel (xlsx) export tests.
- attachment headers, xlsx content-type, PK (zip) signature
- header row / styling / HTML stripped from the narrative
- date range filter and its validation

"""

import datetime
import io

from openpyxl import load_workbook

from sikus.services.export import export_filename, format_created_at
from tests.helpers import auth_header, register_and_approve, setup_admin_and_user, submit


def _load(content: bytes):
    return load_workbook(io.BytesIO(content)).active


def test_export_xlsx_ok(client, db_session):
    ctx = setup_admin_and_user(client, db_session)
    submit(
        client,
        ctx["user_token"],
        "<p>TPS <strong>banjir</strong></p>",
        tindak_lanjut_ptps="Pindah lokasi",
    )

    res = client.get("/api/reports/export.xlsx", headers=auth_header(ctx["user_token"]))
    assert res.status_code == 200, res.text
    assert res.headers.get("content-type", "").startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    cd = res.headers.get("content-disposition", "")
    assert "attachment" in cd
    assert 'filename="laporan-ptps.xlsx"' in cd
    assert res.content[:2] == b"PK"

    ws = _load(res.content)
    assert ws.title == "Laporan PTPS"
    header = [c.value for c in ws[1]]
    assert header == [
        "ID", "Nama PTPS", "Nomor PTPS", "Kelurahan", "Kecamatan",
        "Uraian Kejadian", "Tindak Lanjut PTPS", "Tindak Lanjut KPPS", "Status", "Tanggal Dibuat",
    ]
    assert ws["A1"].font.bold
    assert ws.column_dimensions["F"].width == 40

    row = [c.value for c in ws[2]]
    assert row[2] == ctx["user_nomor_ptps"]
    assert row[5] == "TPS banjir"
    assert row[6] == "Pindah lokasi"
    assert row[7] in ("", None)
    assert row[8] == "Terkirim"


def test_export_scoped_by_role(client, db_session):
    ctx = setup_admin_and_user(client, db_session)
    other = register_and_approve(client, ctx["admin_token"])
    submit(client, ctx["user_token"])
    submit(client, other["user_token"])

    as_user = _load(client.get("/api/reports/export.xlsx", headers=auth_header(ctx["user_token"])).content)
    assert as_user.max_row == 2

    as_admin = _load(client.get("/api/reports/export.xlsx", headers=auth_header(ctx["admin_token"])).content)
    assert as_admin.max_row == 3


def test_export_date_range(client, db_session):
    ctx = setup_admin_and_user(client, db_session)
    submit(client, ctx["user_token"])
    headers = auth_header(ctx["admin_token"])
    today = datetime.datetime.now(datetime.timezone.utc).date()

    res = client.get(
        f"/api/reports/export.xlsx?start_date={today.isoformat()}&end_date={today.isoformat()}",
        headers=headers,
    )
    assert res.status_code == 200, res.text
    assert f"laporan-ptps-{today.isoformat()}-{today.isoformat()}.xlsx" in res.headers["content-disposition"]

    empty = client.get("/api/reports/export.xlsx?start_date=2000-01-01&end_date=2000-01-31", headers=headers)
    assert empty.status_code == 404
    assert empty.json()["error"] == "Tidak ada laporan dalam rentang tanggal yang dipilih"

    half = client.get(f"/api/reports/export.xlsx?start_date={today.isoformat()}", headers=headers)
    assert half.status_code == 400

    reversed_range = client.get("/api/reports/export.xlsx?start_date=2024-02-10&end_date=2024-02-01", headers=headers)
    assert reversed_range.status_code == 400


def test_export_helpers():
    assert export_filename() == "laporan-ptps.xlsx"
    assert export_filename(datetime.date(2024, 2, 1), datetime.date(2024, 2, 14)) == "laporan-ptps-2024-02-01-2024-02-14.xlsx"
    assert format_created_at(datetime.datetime(2024, 2, 14, 9, 5, 3)) == "14/02/2024 09.05.03"
    assert format_created_at(None) == ""


def test_export_keeps_formula_like_text_as_text(client, db_session):
    ctx = setup_admin_and_user(client, db_session)
    narrative = '=HYPERLINK("http://evil","klik")'
    submit(client, ctx["user_token"], narrative, tindak_lanjut_ptps="+62 lapor", tindak_lanjut_kpps="@kpps")

    res = client.get("/api/reports/export.xlsx", headers=auth_header(ctx["admin_token"]))
    assert res.status_code == 200, res.text

    ws = _load(res.content)
    assert ws["F2"].value == narrative
    for ref in ("B2", "C2", "F2", "G2", "H2"):
        assert ws[ref].data_type == "s"
    assert ws["G2"].value == "+62 lapor"
    assert ws["H2"].value == "@kpps"


def test_export_drops_control_characters(client, db_session):
    ctx = setup_admin_and_user(client, db_session)
    submit(client, ctx["user_token"], "<p>ok</p>")
    submit(client, ctx["user_token"], "<p>teks\x0bdari editor</p>", tindak_lanjut_kpps="catatan\x01kpps")

    res = client.get("/api/reports/export.xlsx", headers=auth_header(ctx["admin_token"]))
    assert res.status_code == 200, res.text

    ws = _load(res.content)
    narratives = {ws.cell(row=r, column=6).value for r in range(2, ws.max_row + 1)}
    assert narratives == {"ok", "teksdari editor"}
    # newest first
    assert ws["H2"].value == "catatankpps"
