"""Fehlerklassen für die Reservierungs-API."""


class ApiError(Exception):
    """Fehler mit HTTP-Status und lesbarer Nachricht."""

    def __init__(self, message: str, status: int = 400):
        self.message = message
        self.status = status
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"status": self.status, "message": self.message}


class ValidationError(ApiError):
    """400: ungültige oder fehlende Felder, Geschäftsregel verletzt"""

    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFoundError(ApiError):
    """404: Reservierung existiert nicht"""

    def __init__(self, message: str):
        super().__init__(message, 404)
