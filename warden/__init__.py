"""Warden - user management and authentication GraphQL API."""

__version__ = "0.1.0"
