"""
Wallet file and persisted state exceptions.
"""

from typing import Optional

from sondeur.domain.exceptions.base import SondeurException


class WalletFileParseError(SondeurException):
    """Raised when an uploaded wallet list cannot be parsed."""

    def __init__(self, file_name: str, message: str, line: Optional[int] = None):
        """
        Initialize wallet file parse error.

        Args:
            file_name: Name of the file being parsed
            message: Underlying error description
            line: 1-based line number, when known
        """
        location = f"{file_name}:{line}" if line is not None else file_name
        super().__init__(
            f"{location}: {message}",
            details={"file_name": file_name, "line": line},
        )
        self.file_name = file_name
        self.line = line


class StorageError(SondeurException):
    """Persisted state could not be read or written."""
