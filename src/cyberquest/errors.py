"""Domain error taxonomy.

Every error carries a stable machine-readable ``kind`` and the HTTP status
the global handler maps it to. Messages are safe to show to clients.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: str = "app_error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "detail": self.message}


class ValidationError(AppError):
    """Malformed or missing input. Raised before any write begins."""

    kind = "validation_error"
    status_code = 422

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "fields": self.fields}


class NotFoundError(AppError):
    """A referenced user, quiz, activity, challenge or post does not exist."""

    kind = "not_found"
    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> NotFoundError:
        return cls(f"{entity} {entity_id} not found")


class StorageError(AppError):
    """The persistence layer failed. Details are logged, never returned."""

    kind = "storage_error"
    status_code = 503

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message)
