"""
Job posting data models for resumesync.

Defines the stored job posting, the listing filter and pagination inputs,
and the page returned to listing views.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseDocument, EmbeddedModel


class JobPosting(BaseDocument):
    """
    A job posting row.

    Array columns (responsibilities, skills, qualifications, benefits) are
    plain string lists. ``embedding`` is either a full vector or absent.
    """

    # Basic Information
    job_title: str = Field(..., min_length=1)
    company_name: str
    location: str = ""
    job_description: str = ""
    job_summary: Optional[str] = None

    # Employment Details
    employment_type: Optional[str] = None
    experience_level: Optional[str] = None
    remote_type: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    currency: Optional[str] = None

    # Requirements
    responsibilities: list[str] = Field(default_factory=list)
    must_have_skills: list[str] = Field(default_factory=list)
    nice_to_have_skills: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    required_education_level: Optional[str] = None
    years_of_experience_min: Optional[int] = None
    years_of_experience_max: Optional[int] = None

    # Company Context
    company_size: Optional[str] = None
    industry: Optional[str] = None
    benefits: list[str] = Field(default_factory=list)

    # Listing
    language: str = "en"
    is_active: bool = True

    # Vector embedding for semantic matching
    embedding: Optional[list[float]] = None

    @field_validator("min_salary", "max_salary")
    @classmethod
    def validate_amount(cls, v: Optional[float]) -> Optional[float]:
        """Validate salary amount is non-negative."""
        if v is not None and v < 0:
            raise ValueError("Salary amount must be non-negative")
        return v

    @property
    def job_id(self) -> Optional[str]:
        return str(self.id) if self.id is not None else None


class JobFilters(BaseModel):
    """Listing filters; every field is optional."""

    search: Optional[str] = None
    locations: list[str] = Field(default_factory=list)
    employment_types: list[str] = Field(default_factory=list)
    experience_levels: list[str] = Field(default_factory=list)
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    language: Optional[str] = None


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class JobPage(BaseModel):
    """One page of a filtered job listing."""

    jobs: list[JobPosting] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    total_pages: int = 0


class SalaryBounds(EmbeddedModel):
    """Lowest and highest advertised salary across active jobs."""

    min: float = 0
    max: float = 0
