"""
Loader exceptions. Every one of them is fatal for a run.
"""


class LoaderError(Exception):
    """Base exception for failures while reading the source workbook."""


class SourceNotFound(LoaderError):
    """Raised when the workbook path is missing or unreadable."""


class SheetNotFound(LoaderError):
    """Raised when the requested sheet is absent from the workbook."""


class SchemaMismatch(LoaderError):
    """Raised when required columns are missing after header cleaning."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")
