"""
Section repositories for the per-resume collections.

A section is always written as a whole: every row for the resume is
deleted, then the current list is inserted with ``display_order`` equal to
list position. Personal details are the exception, a single row upserted by
``resume_id``.
"""

from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ValidationError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from resumesync.data.database import DatabaseManager
from resumesync.data.mappers import (
    SECTION_MAPPERS,
    SectionMapper,
    personal_info_from_record,
    personal_info_to_record,
)
from resumesync.data.models import PersonalDetailsRecord, PersonalInfo, SectionRecord
from resumesync.exceptions import PersistenceError
from resumesync.utils.constants import SECTION_COLLECTIONS, Section
from resumesync.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class SectionRepository(BaseRepository[SectionRecord]):
    """
    Repository for one ordered resume section (experiences, skills, ...).

    The translation between UI items and stored rows comes from the
    section's SectionMapper.
    """

    def __init__(self, mapper: SectionMapper, db_manager: Optional[DatabaseManager] = None) -> None:
        super().__init__(db_manager)
        self._mapper = mapper

    @property
    def collection_name(self) -> str:
        return self._mapper.collection_name

    @property
    def model_class(self) -> type[SectionRecord]:
        return self._mapper.record_class

    @property
    def section(self) -> Section:
        return self._mapper.section

    def _error(self, operation: str, exc: Exception) -> PersistenceError:
        logger.error(f"Error during {operation} on {self.section.value}: {exc}")
        return PersistenceError(self.section.value, str(exc), operation=operation, cause=exc)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    async def replace_section(
        self,
        resume_id: str | ObjectId,
        items: list[Any],
        session: Any = None,
    ) -> None:
        """
        Replace every stored row of this section for a resume.

        Raises:
            PersistenceError: If the delete, the mapping or the insert fails
        """
        oid = self._to_object_id(resume_id)
        collection = self._get_async_collection()

        try:
            await collection.delete_many({"resume_id": oid}, session=session)
        except PyMongoError as e:
            raise self._error("delete", e) from e

        if not items:
            return

        try:
            rows = self._mapper.to_rows(oid, items)
        except ValidationError as e:
            raise self._error("map", e) from e

        try:
            await collection.insert_many(rows, session=session)
        except PyMongoError as e:
            raise self._error("insert", e) from e

        logger.debug(f"Saved {len(rows)} {self.section.value} rows for resume {oid}")

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    async def fetch_section(self, resume_id: str | ObjectId, session: Any = None) -> list[BaseModel]:
        """
        Read the section back as UI items ordered by display_order.

        Raises:
            PersistenceError: If the read or the row conversion fails
        """
        oid = self._to_object_id(resume_id)
        collection = self._get_async_collection()

        try:
            cursor = collection.find({"resume_id": oid}, session=session).sort(
                "display_order", ASCENDING
            )
            rows = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise self._error("read", e) from e

        try:
            return self._mapper.from_rows(rows)
        except ValidationError as e:
            raise self._error("read", e) from e


class PersonalDetailsRepository(BaseRepository[PersonalDetailsRecord]):
    """Repository for the single personal details row of each resume."""

    @property
    def collection_name(self) -> str:
        return SECTION_COLLECTIONS[Section.PERSONAL_INFO]

    @property
    def model_class(self) -> type[PersonalDetailsRecord]:
        return PersonalDetailsRecord

    def _error(self, operation: str, exc: Exception) -> PersistenceError:
        section = Section.PERSONAL_INFO.value
        logger.error(f"Error during {operation} on {section}: {exc}")
        return PersistenceError(section, str(exc), operation=operation, cause=exc)

    async def upsert_personal_details(
        self,
        resume_id: str | ObjectId,
        info: PersonalInfo,
        session: Any = None,
    ) -> None:
        """
        Update the resume's personal details row, inserting it if absent.

        Raises:
            PersistenceError: If the lookup or the write fails
        """
        oid = self._to_object_id(resume_id)
        collection = self._get_async_collection()
        document = personal_info_to_record(oid, info).model_dump_mongo(exclude_none=False)

        try:
            existing = await collection.find_one({"resume_id": oid}, session=session)
        except PyMongoError as e:
            raise self._error("read", e) from e

        try:
            if existing:
                await collection.update_one(
                    {"_id": existing["_id"]}, {"$set": document}, session=session
                )
            else:
                await collection.insert_one(document, session=session)
        except PyMongoError as e:
            raise self._error("update" if existing else "insert", e) from e

    async def fetch_personal_details(
        self, resume_id: str | ObjectId, session: Any = None
    ) -> PersonalInfo:
        """Read personal details; a missing row reads as an empty PersonalInfo."""
        oid = self._to_object_id(resume_id)
        try:
            record = await self.find_one_async({"resume_id": oid}, session=session)
        except (PyMongoError, ValidationError) as e:
            raise self._error("read", e) from e
        return personal_info_from_record(record)


def build_section_repositories(
    db_manager: Optional[DatabaseManager] = None,
) -> dict[Section, SectionRepository]:
    """One SectionRepository per collection section, in save order."""
    return {
        section: SectionRepository(mapper, db_manager)
        for section, mapper in SECTION_MAPPERS.items()
    }
