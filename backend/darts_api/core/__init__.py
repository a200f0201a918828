"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .database import DatabaseManager, get_db, get_db_manager
from .exceptions import (
    ServiceException,
    InvalidIdentifierError,
    PlayerNotFoundError,
    FieldNotFoundError,
    NoMatchInRankingBoundError,
    QueryFailureError,
)
from .logging import setup_logging
from .models import Base

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Database
    "DatabaseManager",
    "get_db",
    "get_db_manager",
    # Exceptions
    "ServiceException",
    "InvalidIdentifierError",
    "PlayerNotFoundError",
    "FieldNotFoundError",
    "NoMatchInRankingBoundError",
    "QueryFailureError",
    # Logging
    "setup_logging",
    # Models
    "Base",
]
