"""Runtime environments.

Settings use the environment to pick the log renderer and to decide
whether demo data may be seeded.
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
