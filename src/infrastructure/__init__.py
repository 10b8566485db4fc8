"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Session and location repositories (SQLAlchemy and in-memory)
- Device and IP location enrichers
- Event bus, structured logging, JWT validation

Structure:
- persistence/: Database adapters and in-memory store
- enrichers/: User agent parsing and GeoIP lookup
- events/: In-memory event bus and event handlers
- logging/: structlog console adapter
- security/: JWT access token service

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
