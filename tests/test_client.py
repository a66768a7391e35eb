"""

SikusClient session handling tests (run against the app through TestClient).
- login stores token + user, authenticated calls carry the bearer token
- a rejected token clears the session
- logout always clears the session

"""

import pytest

from sikus.client import ApiError, SessionExpired, SikusClient
from tests.helpers import register_payload, setup_admin


def test_login_submit_and_logout(client, db_session):
    ctx = setup_admin(client, db_session)
    api = SikusClient(http=client)

    data = api.login(ctx["admin_email"], ctx["admin_password"])
    assert api.is_authenticated
    assert api.is_admin
    assert api.user == data["user"]

    api.submit_report("<p>Saksi tidak hadir</p>")
    listed = api.list_reports()
    assert listed["pagination"]["total"] == 1
    assert api.get_report(listed["reports"][0]["id"])["status"] == "Terkirim"
    assert api.report_stats()["totalReports"] == 1

    assert api.check_auth()["email"] == ctx["admin_email"]

    api.logout()
    assert not api.is_authenticated
    assert api.user is None


def test_invalid_token_clears_session(client):
    api = SikusClient(http=client, token="expired.or.forged")
    api.user = {"id": 1, "role": "user"}

    with pytest.raises(SessionExpired):
        api.list_reports()
    assert api.token is None
    assert api.user is None

    assert api.check_auth() is None


def test_error_body_becomes_api_error(client):
    api = SikusClient(http=client)
    payload = register_payload()
    api.register(**payload)

    with pytest.raises(ApiError) as exc:
        api.register(**payload)
    assert exc.value.status_code == 400
    assert exc.value.message == "Email atau Nomor PTPS sudah terdaftar"

    with pytest.raises(ApiError) as exc:
        api.login(payload["email"], payload["password"])
    assert exc.value.message == "Akun Anda belum disetujui admin"
    assert not api.is_authenticated
