"""
Service layer custom exceptions.

Every failure the player query engine can report is one of the classes below.
Routers translate them into HTTP statuses; nothing else should leak out of the
service layer.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class InvalidIdentifierError(ServiceException):
    """Raised when a player identifier is not a well-formed UUID."""

    def __init__(
        self,
        identifier: str,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Invalid player id: {identifier!r}",
            service="PlayerService",
            operation=operation,
            context={"identifier": identifier},
            original_error=original_error,
        )
        self.identifier = identifier


class PlayerNotFoundError(ServiceException):
    """Raised when a well-formed identifier matches no stored player."""

    def __init__(self, identifier: str, operation: Optional[str] = None):
        super().__init__(
            message=f"Player not found: {identifier}",
            service="PlayerService",
            operation=operation,
            context={"identifier": identifier},
        )
        self.identifier = identifier


class FieldNotFoundError(ServiceException):
    """Raised when a search term matches none of the distinct values of a field."""

    def __init__(self, field: str, term: str, operation: Optional[str] = None):
        super().__init__(
            message=f"{field.capitalize()} not found: {term}",
            service="PlayerService",
            operation=operation,
            context={"field": field, "term": term},
        )
        self.field = field
        self.term = term


class NoMatchInRankingBoundError(ServiceException):
    """Raised when a recognized field value has no players within the ranking bound."""

    def __init__(
        self,
        field: str,
        term: str,
        max_ranking: int,
        operation: Optional[str] = None,
    ):
        super().__init__(
            message=f"No player within ranking {max_ranking} for {field} {term!r}",
            service="PlayerService",
            operation=operation,
            context={"field": field, "term": term, "max_ranking": max_ranking},
        )
        self.field = field
        self.term = term
        self.max_ranking = max_ranking


class QueryFailureError(ServiceException):
    """Raised when the player store could not be read."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Query failed: {message}",
            service=service,
            operation=operation,
            context=context,
            original_error=original_error,
        )
