"""
Resume repository: the resume aggregate over its ten collections.

A resume is one metadata row in ``resumes`` plus personal details and
eight ordered sections, each in its own collection. Saving writes the
sections one after another and isolates their failures; fetching reads
them concurrently. An embedding of the saved resume is generated after
every save and stored on the metadata row.
"""

import asyncio
from typing import Any, Awaitable, Optional, TypeVar

from bson import ObjectId
from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from resumesync.data.database import DatabaseManager
from resumesync.data.mappers import COLLECTION_SECTIONS
from resumesync.data.models import (
    EmbeddingResult,
    PersonalInfo,
    RegenerationResult,
    ResumeData,
    ResumeRecord,
    ResumeSummary,
    SaveResumeResult,
)
from resumesync.exceptions import EmbeddingError, PersistenceError
from resumesync.ml.embeddings.change_detector import should_regenerate
from resumesync.ml.embeddings.generator import EmbeddingGenerator, get_embedding_generator
from resumesync.utils.config import get_settings
from resumesync.utils.constants import (
    DEFAULT_RESUME_TITLE,
    DEFAULT_TEMPLATE_ID,
    RESUMES_COLLECTION,
    Section,
)
from resumesync.utils.logger import get_logger, sanitize

from .base import BaseRepository
from .section_repository import (
    PersonalDetailsRepository,
    SectionRepository,
    build_section_repositories,
)

logger = get_logger(__name__)

R = TypeVar("R")

METADATA_SECTION = "resume"


class ResumeRepository(BaseRepository[ResumeRecord]):
    """
    Repository for the resume aggregate.

    Save policies:
        best_effort: each section write is isolated; ``success`` reflects
            only the metadata write.
        atomic: metadata and all sections share one transaction; any
            failure rolls everything back.
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        generator: Optional[EmbeddingGenerator] = None,
        save_policy: Optional[str] = None,
    ) -> None:
        super().__init__(db_manager)
        self._generator = generator or get_embedding_generator()
        self._save_policy = save_policy or get_settings().persistence.save_policy
        self._personal = PersonalDetailsRepository(self._db_manager)
        self._sections: dict[Section, SectionRepository] = build_section_repositories(
            self._db_manager
        )

    @property
    def collection_name(self) -> str:
        return RESUMES_COLLECTION

    @property
    def model_class(self) -> type[ResumeRecord]:
        return ResumeRecord

    @property
    def save_policy(self) -> str:
        return self._save_policy

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    async def _write_metadata(
        self, resume: ResumeData, user_id: str, session: Any = None, strict: bool = False
    ) -> ObjectId:
        """
        Insert or update the metadata row and return the resume id.

        An update that matches no row only fails when ``strict`` is set; otherwise
        the sections are still written under the given id.
        """
        title = resume.title or DEFAULT_RESUME_TITLE
        template_id = resume.template_id or DEFAULT_TEMPLATE_ID

        try:
            if not resume.resume_id:
                record = ResumeRecord(
                    user_id=user_id,
                    title=title,
                    template_id=template_id,
                    is_primary=resume.is_primary,
                )
                created = await self.create_async(record, session=session)
                return created.id

            if not self._is_valid_id(resume.resume_id):
                raise PersistenceError(
                    METADATA_SECTION, f"invalid resume id: {resume.resume_id}", operation="update"
                )
            updated = await self.update_async(
                resume.resume_id,
                {"title": title, "template_id": template_id, "is_primary": resume.is_primary},
                session=session,
            )
            if not updated:
                if not strict:
                    logger.warning(f"No resume row matched {resume.resume_id}; writing sections anyway")
                    return self._to_object_id(resume.resume_id)
                raise PersistenceError(
                    METADATA_SECTION, f"resume not found: {resume.resume_id}", operation="update"
                )
            return self._to_object_id(resume.resume_id)

        except PyMongoError as e:
            operation = "update" if resume.resume_id else "insert"
            raise PersistenceError(METADATA_SECTION, str(e), operation=operation, cause=e) from e

    async def _write_section(
        self, resume_id: ObjectId, resume: ResumeData, section: Section, session: Any = None
    ) -> None:
        if section == Section.PERSONAL_INFO:
            await self._personal.upsert_personal_details(
                resume_id, resume.personal_info, session=session
            )
        else:
            await self._sections[section].replace_section(
                resume_id, resume.section_items(section), session=session
            )

    @staticmethod
    def _save_order() -> tuple[Section, ...]:
        return (Section.PERSONAL_INFO, *COLLECTION_SECTIONS)

    async def _save_best_effort(self, resume: ResumeData, user_id: str) -> SaveResumeResult:
        logger.debug(f"Saving resume for {user_id}: {sanitize(resume.personal_info.model_dump())}")
        try:
            resume_id = await self._write_metadata(resume, user_id)
        except PersistenceError as e:
            logger.error(f"Error saving resume metadata: {e}")
            return SaveResumeResult(success=False, error=str(e))

        section_errors: dict[str, str] = {}
        for section in self._save_order():
            try:
                await self._write_section(resume_id, resume, section)
            except PersistenceError as e:
                logger.error(f"Section {section.value} failed to save: {e}")
                section_errors[section.value] = str(e)

        if section_errors:
            logger.warning(f"Some sections failed to save: {sorted(section_errors)}")

        return SaveResumeResult(
            success=True, resume_id=str(resume_id), section_errors=section_errors
        )

    async def _save_atomic(self, resume: ResumeData, user_id: str) -> SaveResumeResult:
        try:
            async with self._db_manager.async_transaction() as session:
                resume_id = await self._write_metadata(
                    resume, user_id, session=session, strict=True
                )
                for section in self._save_order():
                    await self._write_section(resume_id, resume, section, session=session)
        except PersistenceError as e:
            logger.error(f"Atomic resume save rolled back: {e}")
            return SaveResumeResult(success=False, error=str(e))
        except PyMongoError as e:
            logger.error(f"Atomic resume save failed to commit: {e}")
            return SaveResumeResult(success=False, error=str(e))

        return SaveResumeResult(success=True, resume_id=str(resume_id))

    async def save(self, resume: ResumeData, user_id: str) -> SaveResumeResult:
        """
        Save a resume and regenerate its embedding.

        A resume without ``resume_id`` is created; otherwise the existing
        one is overwritten. Embedding failures are recorded on the result
        and never change ``success``.

        Args:
            resume: The resume aggregate
            user_id: Owner of the resume

        Returns:
            SaveResumeResult with the resume id on success
        """
        if self._save_policy == "atomic":
            result = await self._save_atomic(resume, user_id)
        else:
            result = await self._save_best_effort(resume, user_id)

        if not result.success:
            return result

        logger.info(f"Generating embedding for resume {result.resume_id}")
        embedding_result = await self.generate_and_save_embedding(result.resume_id)
        if not embedding_result.success:
            logger.warning(f"Embedding generation failed: {embedding_result.error}")
            result.embedding_error = embedding_result.error

        return result

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    @staticmethod
    async def _or_default(awaitable: Awaitable[R], default: R, section: Section) -> R:
        try:
            return await awaitable
        except PersistenceError as e:
            logger.error(f"Section {section.value} failed to load: {e}")
            return default

    async def fetch(self, resume_id: str) -> Optional[ResumeData]:
        """
        Load a resume with all of its sections.

        Returns None when the metadata row does not exist. A section that
        fails to load comes back empty.
        """
        if not self._is_valid_id(resume_id):
            logger.warning(f"Invalid resume id: {resume_id}")
            return None

        try:
            record = await self.get_by_id_async(resume_id)
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching resume {resume_id}: {e}")
            return None

        if record is None:
            return None

        personal, *collections = await asyncio.gather(
            self._or_default(
                self._personal.fetch_personal_details(resume_id),
                PersonalInfo(),
                Section.PERSONAL_INFO,
            ),
            *(
                self._or_default(self._sections[section].fetch_section(resume_id), [], section)
                for section in COLLECTION_SECTIONS
            ),
        )
        sections = {section.value: items for section, items in zip(COLLECTION_SECTIONS, collections)}

        return ResumeData(
            resume_id=str(record.id),
            title=record.title,
            template_id=record.template_id,
            is_primary=record.is_primary,
            personal_info=personal,
            embedding=record.embedding,
            **sections,
        )

    async def fetch_user_resumes(self, user_id: str) -> list[ResumeSummary]:
        """List a user's resumes, most recently updated first."""
        try:
            records = await self.find_async(
                {"user_id": user_id}, sort_by="updated_at", sort_order=DESCENDING
            )
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching resumes for user {user_id}: {e}")
            return []

        return [
            ResumeSummary(
                resume_id=str(r.id),
                title=r.title,
                template_id=r.template_id,
                is_primary=r.is_primary,
                created_at=r.created_at,
                updated_at=r.updated_at,
            )
            for r in records
        ]

    # -------------------------------------------------------------------------
    # Embedding Operations
    # -------------------------------------------------------------------------

    async def _embed_and_store(self, resume_id: str, resume: ResumeData) -> EmbeddingResult:
        try:
            embedding = await self._generator.generate_resume_embedding(resume)
        except EmbeddingError as e:
            logger.error(f"Error generating embedding for resume {resume_id}: {e}")
            return EmbeddingResult(success=False, error=str(e))

        try:
            await self.update_async(resume_id, {"embedding": embedding})
        except PyMongoError as e:
            logger.error(f"Error saving embedding for resume {resume_id}: {e}")
            return EmbeddingResult(success=False, error=str(e))

        return EmbeddingResult(success=True, embedding=embedding)

    async def generate_and_save_embedding(self, resume_id: str) -> EmbeddingResult:
        """Embed the resume as currently stored and save the vector on it."""
        resume = await self.fetch(resume_id)
        if resume is None:
            return EmbeddingResult(success=False, error="Resume not found")
        return await self._embed_and_store(resume_id, resume)

    async def regenerate_embedding_if_needed(
        self, resume_id: str, new_resume: ResumeData
    ) -> RegenerationResult:
        """
        Re-embed only when ``new_resume`` differs structurally from the
        stored resume.
        """
        current = await self.fetch(resume_id)
        if current is None:
            return RegenerationResult(regenerated=False, error="Resume not found")

        if not should_regenerate(current, new_resume):
            logger.debug(f"Embedding for resume {resume_id} is up to date")
            return RegenerationResult(regenerated=False)

        result = await self._embed_and_store(resume_id, new_resume)
        if not result.success:
            return RegenerationResult(regenerated=False, error=result.error)
        return RegenerationResult(regenerated=True)


_resume_repository: Optional[ResumeRepository] = None


def get_resume_repository() -> ResumeRepository:
    """Get the shared resume repository instance."""
    global _resume_repository
    if _resume_repository is None:
        _resume_repository = ResumeRepository()
    return _resume_repository
