"""
Base repository class providing common async CRUD operations.

All collection-specific repositories inherit from this base class. Every
operation takes an optional ``session`` so callers can enlist it in a
transaction.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING

from resumesync.data.database import DatabaseManager, get_database_manager
from resumesync.data.models.base import BaseRecord, TimestampMixin
from resumesync.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for stored row models
T = TypeVar("T", bound=BaseRecord)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        return ObjectId(id_value)

    @staticmethod
    def _is_valid_id(id_value: str | ObjectId) -> bool:
        if isinstance(id_value, ObjectId):
            return True
        try:
            ObjectId(id_value)
        except (InvalidId, TypeError):
            return False
        return True

    # -------------------------------------------------------------------------
    # Asynchronous CRUD Operations
    # -------------------------------------------------------------------------

    async def create_async(self, model: T, session: Any = None) -> T:
        """Insert a new document and assign its generated id to the model."""
        collection = self._get_async_collection()
        if isinstance(model, TimestampMixin):
            now = datetime.utcnow()
            model.created_at = now
            model.updated_at = now
        document = self._to_document(model)

        result = await collection.insert_one(document, session=session)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    async def get_by_id_async(self, id_value: str | ObjectId, session: Any = None) -> Optional[T]:
        """Get a document by its ID."""
        collection = self._get_async_collection()
        document = await collection.find_one(
            {"_id": self._to_object_id(id_value)}, session=session
        )
        return self._to_model(document)

    async def find_async(
        self,
        query: dict[str, Any],
        sort_by: Optional[str] = "created_at",
        sort_order: int = DESCENDING,
        projection: Optional[dict[str, Any]] = None,
        session: Any = None,
    ) -> list[T]:
        """Find every document matching a query, without a server-side limit."""
        collection = self._get_async_collection()
        cursor = collection.find(query, projection, session=session)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)

        documents = await cursor.to_list(length=None)
        return self._to_models(documents)

    async def find_one_async(self, query: dict[str, Any], session: Any = None) -> Optional[T]:
        """Find a single document matching a query."""
        collection = self._get_async_collection()
        document = await collection.find_one(query, session=session)
        return self._to_model(document)

    async def update_async(
        self,
        id_value: str | ObjectId,
        update_data: dict[str, Any],
        session: Any = None,
    ) -> bool:
        """
        Update fields of a document by ID.

        Returns True if a document matched, even when no value changed.
        """
        collection = self._get_async_collection()
        update_data["updated_at"] = datetime.utcnow()

        result = await collection.update_one(
            {"_id": self._to_object_id(id_value)},
            {"$set": update_data},
            session=session,
        )
        if result.matched_count > 0:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
            return True
        return False

    async def distinct_async(self, field: str, query: Optional[dict[str, Any]] = None) -> list[Any]:
        """Distinct values of one field across matching documents."""
        collection = self._get_async_collection()
        return await collection.distinct(field, query or {})
