"""Deployment environment of the session service.

Development gets colored console logs and may create tables at startup;
every other environment logs JSON and relies on Alembic migrations.
"""

from enum import Enum


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
