"""
Job repository for job posting listings.

Listing combines a server-side query (activity, language, text search,
type, level and salary predicates) with a client-side location filter,
then paginates in memory. Every matching posting is loaded per request.
"""

import math
import re
from typing import Any, Optional

from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from resumesync.core.location_filter import filter_by_locations
from resumesync.data.database import DatabaseManager
from resumesync.data.models import JobFilters, JobPage, JobPosting, PaginationParams, SalaryBounds
from resumesync.exceptions import EmbeddingError, PersistenceError
from resumesync.ml.embeddings.generator import EmbeddingGenerator, get_embedding_generator
from resumesync.utils.config import get_settings
from resumesync.utils.constants import JOBS_COLLECTION
from resumesync.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

SEARCH_FIELDS = ("job_title", "company_name", "job_description")


def build_job_query(filters: JobFilters) -> dict[str, Any]:
    """Translate listing filters into a MongoDB query over active jobs."""
    query: dict[str, Any] = {"is_active": True}

    if filters.language:
        query["language"] = filters.language

    search = (filters.search or "").strip()
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
        ]

    if filters.employment_types:
        query["employment_type"] = {"$in": list(filters.employment_types)}
    if filters.experience_levels:
        query["experience_level"] = {"$in": list(filters.experience_levels)}

    if filters.min_salary is not None:
        query["min_salary"] = {"$gte": filters.min_salary}
    if filters.max_salary is not None:
        query["max_salary"] = {"$lte": filters.max_salary}

    return query


def paginate(jobs: list[JobPosting], pagination: PaginationParams) -> JobPage:
    """Slice one page out of an already filtered and sorted listing."""
    total_count = len(jobs)
    start = pagination.offset
    return JobPage(
        jobs=jobs[start : start + pagination.limit],
        total_count=total_count,
        page=pagination.page,
        total_pages=math.ceil(total_count / pagination.limit),
    )


class JobRepository(BaseRepository[JobPosting]):
    """Repository for job posting operations."""

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        generator: Optional[EmbeddingGenerator] = None,
    ) -> None:
        super().__init__(db_manager)
        self._generator = generator or get_embedding_generator()

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[JobPosting]:
        return JobPosting

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    async def fetch_jobs(
        self,
        filters: Optional[JobFilters] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> JobPage:
        """
        Fetch one page of active jobs matching the filters.

        Jobs are ordered newest first. A store failure yields an empty page.

        Args:
            filters: Listing filters (all optional)
            pagination: Page number and size; page size defaults to
                JOBS_DEFAULT_PAGE_SIZE

        Returns:
            JobPage with the page's jobs and post-filter totals
        """
        filters = filters or JobFilters()
        pagination = pagination or PaginationParams(limit=get_settings().jobs.default_page_size)

        try:
            jobs = await self.find_async(
                build_job_query(filters), sort_by="created_at", sort_order=DESCENDING
            )
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching jobs: {e}")
            return JobPage()

        if filters.locations:
            jobs = filter_by_locations(jobs, filters.locations)

        return paginate(jobs, pagination)

    async def get_job_by_id(self, job_id: str) -> Optional[JobPosting]:
        """Get an active job by id."""
        if not self._is_valid_id(job_id):
            return None
        try:
            return await self.find_one_async(
                {"_id": self._to_object_id(job_id), "is_active": True}
            )
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error fetching job {job_id}: {e}")
            return None

    async def _distinct_active(self, field: str) -> list[str]:
        try:
            values = await self.distinct_async(field, {"is_active": True})
        except PyMongoError as e:
            logger.error(f"Error fetching distinct {field}: {e}")
            return []
        return sorted({v for v in values if isinstance(v, str) and v.strip()})

    async def get_job_locations(self) -> list[str]:
        return await self._distinct_active("location")

    async def get_employment_types(self) -> list[str]:
        return await self._distinct_active("employment_type")

    async def get_experience_levels(self) -> list[str]:
        return await self._distinct_active("experience_level")

    async def get_salary_range(self) -> SalaryBounds:
        """Lowest min_salary and highest max_salary across active jobs."""
        try:
            mins = await self.distinct_async("min_salary", {"is_active": True})
            maxes = await self.distinct_async("max_salary", {"is_active": True})
        except PyMongoError as e:
            logger.error(f"Error fetching salary range: {e}")
            return SalaryBounds()

        mins = [v for v in mins if v is not None]
        maxes = [v for v in maxes if v is not None]
        return SalaryBounds(
            min=min(mins) if mins else 0,
            max=max(maxes) if maxes else 0,
        )

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    async def _store_embedding(self, job: JobPosting) -> None:
        """Embed a stored job; failures are logged and leave it without a vector."""
        try:
            embedding = await self._generator.generate_job_embedding(job)
            await self.update_async(job.id, {"embedding": embedding})
        except EmbeddingError as e:
            logger.warning(f"Embedding generation failed for job {job.job_id}: {e}")
            return
        except PyMongoError as e:
            logger.error(f"Error saving embedding for job {job.job_id}: {e}")
            return
        job.embedding = embedding

    async def create_job(self, job: JobPosting) -> JobPosting:
        """
        Insert a job posting and embed it.

        Raises:
            PersistenceError: If the insert fails
        """
        job.embedding = None
        try:
            created = await self.create_async(job)
        except PyMongoError as e:
            logger.error(f"Error creating job: {e}")
            raise PersistenceError(JOBS_COLLECTION, str(e), operation="insert", cause=e) from e

        logger.info(f"Created job {created.job_id}: {created.job_title}")
        await self._store_embedding(created)
        return created

    async def update_job(self, job_id: str, job: JobPosting) -> Optional[JobPosting]:
        """
        Overwrite a job posting and re-embed it.

        Returns None when no job has this id.

        Raises:
            PersistenceError: If the update fails
        """
        if not self._is_valid_id(job_id):
            return None

        fields = job.model_dump(exclude={"id", "created_at", "updated_at", "embedding"})
        try:
            matched = await self.update_async(job_id, fields)
            if not matched:
                return None
            updated = await self.get_by_id_async(job_id)
        except PyMongoError as e:
            logger.error(f"Error updating job {job_id}: {e}")
            raise PersistenceError(JOBS_COLLECTION, str(e), operation="update", cause=e) from e

        if updated is not None:
            await self._store_embedding(updated)
        return updated


_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the shared job repository instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
