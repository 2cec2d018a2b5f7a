"""Application errors surfaced to callers of the ranking engine."""

from typing import Any


class AppError(Exception):
    """Base class for errors carrying a stable machine-readable code."""

    code = "APP_ERROR"

    def __init__(self, message: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        """Structured form for transports that return errors as JSON."""
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.extra:
            data["extra"] = self.extra
        return data


class ValidationError(AppError, ValueError):
    """Malformed ranking input, raised before any scoring happens."""

    code = "VALIDATION_ERROR"
