"""SQLite storage of users, roles, permissions, organisation records and audit logs for an order management system."""

__version__ = "0.1.0"

__all__ = [
    "access",
    "branches",
    "database",
    "entities",
    "organisation",
    "people",
    "permissions",
    "repository",
    "workstations",
]