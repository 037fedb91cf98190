"""Exceptions raised by the import and export use cases."""


class WorkbookStructureError(ValueError):
    """Raised when an upload cannot be read as a data workbook at all."""


class ImportSessionNotFoundError(LookupError):
    """Raised when a preview session is unknown, expired or already confirmed."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Import session {session_id} not found or expired")
        self.session_id = session_id


class RecordNotFoundError(LookupError):
    """Raised when a referenced record does not exist."""


__all__ = [
    "ImportSessionNotFoundError",
    "RecordNotFoundError",
    "WorkbookStructureError",
]
