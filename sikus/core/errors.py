"""
errors.py

Domain error taxonomy.

Services raise these exceptions without knowing anything about HTTP;
the handlers registered in sikus.main turn them into
{"error": <message>} JSON responses with the matching status code.

- ValidationError   : bad or missing input                 (400)
- ConflictError     : email / nomor PTPS already taken      (400)
- AuthError         : login rejected                        (400)
- UnauthorizedError : missing / invalid / expired token     (401)
- ForbiddenError    : authenticated but not allowed         (403)
- NotFoundError     : resource does not exist               (404)

"""

from starlette import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Data tidak valid"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email atau Nomor PTPS sudah terdaftar"


class AuthError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email atau password salah"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
