"""Errors raised at the ingestion boundary.

The cleaning, profiling and analysis functions never raise for a parsed
table; only loading a file can fail.
"""


class DataCleanerError(Exception):
    """Base class for data_cleaner errors."""


class IngestionError(DataCleanerError, ValueError):
    """The source file could not be read or parsed."""


class UnsupportedFileError(IngestionError):
    """The source file extension is neither CSV nor Excel."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(
            f"Unsupported file type: {extension or '(none)'}. Upload a CSV or Excel file."
        )
