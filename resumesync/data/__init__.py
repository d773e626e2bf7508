"""
Data layer for resumesync.

Provides database connections, data models, field mapping and repository
classes for data access throughout the application.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models
- mappers: UI <-> storage field translation
- repositories: Database operations and queries
"""

from .database import (
    DatabaseManager,
    get_async_db,
    get_database_manager,
)

__all__ = [
    "DatabaseManager",
    "get_async_db",
    "get_database_manager",
]
