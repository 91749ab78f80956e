"""Domain errors raised by services and mapped to responses by adapters."""

from typing import Dict, Optional


class LeagueError(Exception):
    """Base error for league operations"""


class NotFoundError(LeagueError):
    def __init__(self, entity: str, entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        suffix = f" {entity_id}" if entity_id else ""
        super().__init__(f"{entity}{suffix} not found")


class FormValidationError(LeagueError):
    """Field-level errors from a form (registration, waiver, etc.)"""

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message)
