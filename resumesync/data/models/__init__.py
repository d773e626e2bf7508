"""
Pydantic data models for resumesync.

This module provides the UI-shaped resume aggregate, the per-collection
storage records, and the job listing models.
"""

# Base models
from .base import BaseDocument, BaseRecord, EmbeddedModel, PyObjectId, TimestampMixin, UIModel

# Resume aggregate
from .resume import (
    Certificate,
    Education,
    EmbeddingResult,
    Experience,
    Interest,
    Language,
    PersonalInfo,
    Project,
    RegenerationResult,
    ResumeData,
    ResumeSummary,
    SaveResumeResult,
    Skill,
    SocialMediaLink,
)

# Storage records
from .records import (
    CertificateRecord,
    EducationRecord,
    ExperienceRecord,
    InterestRecord,
    LanguageRecord,
    PersonalDetailsRecord,
    ProjectRecord,
    ResumeRecord,
    SectionRecord,
    SkillRecord,
    SocialMediaRecord,
)

# Job models
from .job import (
    JobFilters,
    JobPage,
    JobPosting,
    PaginationParams,
    SalaryBounds,
)

__all__ = [
    # Base
    "BaseDocument",
    "BaseRecord",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "UIModel",
    # Resume aggregate
    "Certificate",
    "Education",
    "EmbeddingResult",
    "Experience",
    "Interest",
    "Language",
    "PersonalInfo",
    "Project",
    "RegenerationResult",
    "ResumeData",
    "ResumeSummary",
    "SaveResumeResult",
    "Skill",
    "SocialMediaLink",
    # Records
    "CertificateRecord",
    "EducationRecord",
    "ExperienceRecord",
    "InterestRecord",
    "LanguageRecord",
    "PersonalDetailsRecord",
    "ProjectRecord",
    "ResumeRecord",
    "SectionRecord",
    "SkillRecord",
    "SocialMediaRecord",
    # Job
    "JobFilters",
    "JobPage",
    "JobPosting",
    "PaginationParams",
    "SalaryBounds",
]
