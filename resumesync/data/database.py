"""
Database connection manager for resumesync.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support. Repositories use the async
client; the sync client backs CLI health checks.
"""

from contextlib import asynccontextmanager
from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from resumesync.utils.config import AppSettings, get_settings
from resumesync.utils.constants import (
    JOBS_COLLECTION,
    RESUMES_COLLECTION,
    SECTION_COLLECTIONS,
    Section,
)
from resumesync.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Clients are created lazily on first use and reused afterwards.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._sync_client: Optional[MongoClient] = None
        self._async_client: Optional[AsyncIOMotorClient] = None

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded; hosts containing shell metacharacters are rejected.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            self._sync_client = MongoClient(
                self._uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
            )
        return self._sync_client

    def get_sync_database(self) -> Database:
        """Get synchronous database instance."""
        return self.get_sync_client()[self._db_name]

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            self._sync_client = None
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            self._async_client = AsyncIOMotorClient(
                self._uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
                maxPoolSize=50,
                minPoolSize=5,
            )
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    @asynccontextmanager
    async def async_transaction(self):
        """
        Open a session with a running transaction.

        Commits when the block exits normally and aborts if it raises.
        Requires a replica set or sharded cluster.
        """
        client = self.get_async_client()
        async with await client.start_session() as session:
            async with session.start_transaction():
                yield session

    async def check_async_connection(self) -> bool:
        """Check if asynchronous connection is healthy."""
        try:
            await self.get_async_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Async connection check failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_all(self) -> None:
        """Close all database connections."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create indexes for all collections."""
        logger.info("Ensuring database indexes")

        resumes = self.get_async_collection(RESUMES_COLLECTION)
        await resumes.create_index("user_id")
        await resumes.create_index([("updated_at", DESCENDING)])

        personal = self.get_async_collection(SECTION_COLLECTIONS[Section.PERSONAL_INFO])
        await personal.create_index("resume_id", unique=True)

        for section, collection_name in SECTION_COLLECTIONS.items():
            if section == Section.PERSONAL_INFO:
                continue
            collection = self.get_async_collection(collection_name)
            await collection.create_index([("resume_id", ASCENDING), ("display_order", ASCENDING)])

        jobs = self.get_async_collection(JOBS_COLLECTION)
        await jobs.create_index("is_active")
        await jobs.create_index("language")
        await jobs.create_index("employment_type")
        await jobs.create_index("experience_level")
        await jobs.create_index([("created_at", DESCENDING)])

        logger.info("Database indexes created successfully")


_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the shared database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_async_db() -> AsyncIOMotorDatabase:
    """Convenience function to get asynchronous database."""
    return get_database_manager().get_async_database()
