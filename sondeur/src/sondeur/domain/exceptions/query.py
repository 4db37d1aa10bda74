"""
Chain query exceptions.
"""

from typing import Optional

from sondeur.domain.exceptions.base import SondeurException


class QueryFailedError(SondeurException):
    """
    A single JSON-RPC call did not produce a usable result.

    Covers network failure, timeout, non-2xx status, malformed JSON,
    JSON-RPC error objects and missing result. The cause is kept in
    details for logging only; callers treat every case the same way.
    """

    def __init__(
        self,
        message: str,
        endpoint: str,
        method: str,
        details: Optional[dict] = None,
    ):
        details = dict(details or {})
        details.update(endpoint=endpoint, method=method)
        super().__init__(message, details)
        self.endpoint = endpoint
        self.method = method
