"""
Repository classes for database operations.

Repositories provide a clean interface for CRUD operations on MongoDB
collections, abstracting away the database implementation details.
"""

from .base import BaseRepository
from .job_repository import JobRepository, get_job_repository
from .resume_repository import ResumeRepository, get_resume_repository
from .section_repository import (
    PersonalDetailsRepository,
    SectionRepository,
    build_section_repositories,
)

__all__ = [
    "BaseRepository",
    "JobRepository",
    "PersonalDetailsRepository",
    "ResumeRepository",
    "SectionRepository",
    "build_section_repositories",
    "get_job_repository",
    "get_resume_repository",
]
