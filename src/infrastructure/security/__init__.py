"""Security adapters."""

from src.infrastructure.security.jwt_service import JWTService

__all__ = ["JWTService"]
