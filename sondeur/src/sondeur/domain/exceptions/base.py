"""
Base domain exceptions.
"""

from typing import Optional


class SondeurException(Exception):
    """Base exception for all Sondeur errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(SondeurException):
    """Input rejected before any work started."""


class EntityNotFoundError(SondeurException):
    """Raised when a persisted entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        """
        Initialize entity not found error.

        Args:
            entity: Entity kind (e.g. "RpcConfig")
            entity_id: Identifier that was looked up
        """
        super().__init__(
            f"{entity} not found: {entity_id}",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id
