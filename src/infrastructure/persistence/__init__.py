"""Database persistence infrastructure.

This module provides:
- Base model for all database entities
- Database connection and session management
- SQLAlchemy and in-memory repository implementations
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
