"""Application exceptions, each bound to the HTTP status it answers with."""


class AppException(Exception):
    """Base application exception."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestException(AppException):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedException(AppException):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenException(AppException):
    """Raised for writes outside the caller's role tier or sede scope."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundException(AppException):
    status_code = 404
    default_message = "Resource not found"


class ConflictException(AppException):
    status_code = 409
    default_message = "Conflict"


class EmailAlreadyRegisteredException(ConflictException):
    """Unique email constraint hit on the users table."""

    def __init__(self, email: str | None, on_update: bool = False):
        self.email = email
        if on_update:
            message = f'El correo "{email}" ya está en uso por otro usuario.'
        else:
            message = (
                f'El correo "{email}" ya está registrado por otro usuario. '
                "Por favor usa uno distinto."
            )
        super().__init__(message)


class ValidationException(AppException):
    """Business-rule validation failures that pydantic cannot express."""

    status_code = 422
    default_message = "Validation error"
