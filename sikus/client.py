"""SIKUS API client with session handling.

Holds the current token and user after login, attaches the bearer
token to every authenticated call, and forgets the session as soon
as the server rejects the token.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger


class ApiError(Exception):
    """Error response from the SIKUS API (``{"error": ...}`` body)."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpired(ApiError):
    """The stored token was rejected; the session has been cleared."""


class SikusClient:
    """Session-aware client for the SIKUS REST API.

    ``http`` may be any ``httpx.Client`` (including FastAPI's TestClient);
    when omitted, one is created for ``base_url``.
    """

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None,
                 token: Optional[str] = None):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)
        self.token = token
        self.user: Optional[Dict[str, Any]] = None

    def __enter__(self) -> "SikusClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("role") == "admin")

    def clear_session(self) -> None:
        self.token = None
        self.user = None

    def _request(self, method: str, path: str, *, auth: bool = True, **kwargs) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if auth:
            if not self.token:
                raise SessionExpired(401, "Token required")
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(method, path, headers=headers, **kwargs)

        if response.status_code == 401 and auth:
            self.clear_session()
            raise SessionExpired(401, self._error_message(response))
        if response.is_error:
            raise ApiError(response.status_code, self._error_message(response))
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return response.json().get("error") or response.reason_phrase
        except ValueError:
            return response.reason_phrase

    # Auth

    def register(self, **profile) -> Dict[str, Any]:
        return self._request("POST", "/api/register", auth=False, json=profile).json()

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/login", auth=False, json={"email": email, "password": password}).json()
        self.token = data["token"]
        self.user = data["user"]
        return data

    def logout(self) -> None:
        try:
            if self.token:
                self._request("POST", "/api/logout")
        except (ApiError, httpx.HTTPError) as e:
            logger.warning("Logout call failed: {}", e)
        finally:
            self.clear_session()

    def check_auth(self) -> Optional[Dict[str, Any]]:
        """Refresh ``user`` from /api/auth/me; clear the session if it is no longer valid."""
        if not self.token:
            return None
        try:
            self.user = self._request("GET", "/api/auth/me").json()["user"]
        except SessionExpired:
            return None
        except ApiError as e:
            if e.status_code == 404:
                self.clear_session()
                return None
            raise
        return self.user

    # Reports

    def submit_report(self, uraian_kejadian: str, tindak_lanjut_ptps: Optional[str] = None,
                      tindak_lanjut_kpps: Optional[str] = None) -> Dict[str, Any]:
        body = {
            "uraian_kejadian": uraian_kejadian,
            "tindak_lanjut_ptps": tindak_lanjut_ptps,
            "tindak_lanjut_kpps": tindak_lanjut_kpps,
        }
        return self._request("POST", "/api/reports", json=body).json()

    def list_reports(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self._request("GET", "/api/reports", params={"page": page, "limit": limit}).json()

    def get_report(self, report_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/reports/{report_id}").json()["report"]

    def update_report_status(self, report_id: int, status: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/reports/{report_id}/status", json={"status": status}).json()

    def report_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/reports/stats").json()["stats"]

    def export_reports(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> bytes:
        params = {}
        if start_date and end_date:
            params = {"start_date": start_date, "end_date": end_date}
        return self._request("GET", "/api/reports/export.xlsx", params=params).content

    # Users (admin)

    def list_users(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self._request("GET", "/api/users", params={"page": page, "limit": limit}).json()

    def update_user_status(self, user_id: int, status: str) -> Dict[str, Any]:
        return self._request("PUT", f"/api/users/{user_id}/status", json={"status": status}).json()

    def update_user(self, user_id: int, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/api/users/{user_id}", json=fields).json()

    def delete_user(self, user_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/users/{user_id}").json()
