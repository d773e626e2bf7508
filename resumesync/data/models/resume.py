"""
Resume aggregate models for resumesync.

These mirror the shape the CV builder works with: one personal info block
plus eight ordered section lists, along with the resume's own metadata.
Month fields (start/end/issue dates) are "YYYY-MM" strings.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from resumesync.utils.constants import (
    DEFAULT_RESUME_TITLE,
    DEFAULT_TEMPLATE_ID,
    LanguageProficiency,
    Section,
    SkillProficiency,
)

from .base import UIModel


class PersonalInfo(UIModel):
    """Contact block and headline of a resume."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    title: str = ""
    summary: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Experience(UIModel):
    """A position held."""

    id: Optional[str] = None
    company: str
    position: str
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""


class Education(UIModel):
    """A degree or course of study."""

    id: Optional[str] = None
    institution: str
    degree: str
    field: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    gpa: str = ""
    description: str = ""


class Skill(UIModel):
    """A named skill with an optional proficiency level."""

    id: Optional[str] = None
    name: str
    category: str = ""
    proficiency: Optional[SkillProficiency] = None


class Project(UIModel):
    id: Optional[str] = None
    name: str
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    url: str = ""
    github: str = ""


class Certificate(UIModel):
    id: Optional[str] = None
    name: str
    issuer: str = ""
    issue_date: str = ""
    expiration_date: str = ""
    credential_id: str = ""
    url: str = ""


class Language(UIModel):
    """A spoken language; proficiency uses the UI vocabulary."""

    id: Optional[str] = None
    name: str
    proficiency: LanguageProficiency = Field(default=LanguageProficiency.LIMITED, validate_default=True)


class SocialMediaLink(UIModel):
    id: Optional[str] = None
    platform: str
    url: str


class Interest(UIModel):
    id: Optional[str] = None
    name: str


class ResumeData(UIModel):
    """
    The full resume aggregate.

    ``resume_id`` is None until the first save assigns one. ``title`` travels
    as ``resumeTitle`` on the wire to match the builder's state shape.
    """

    resume_id: Optional[str] = None
    title: str = Field(default=DEFAULT_RESUME_TITLE, alias="resumeTitle")
    template_id: str = DEFAULT_TEMPLATE_ID
    is_primary: bool = False

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experiences: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certificates: list[Certificate] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)
    social_media: list[SocialMediaLink] = Field(default_factory=list)
    interests: list[Interest] = Field(default_factory=list)

    embedding: Optional[list[float]] = None

    @field_validator("resume_id", mode="before")
    @classmethod
    def coerce_resume_id(cls, v: object) -> Optional[str]:
        """Accept ObjectId values from the store; treat '' as unsaved."""
        if v is None or v == "":
            return None
        return str(v)

    def section_items(self, section: Section) -> list:
        """Return the item list backing a collection section."""
        return {
            Section.EXPERIENCES: self.experiences,
            Section.EDUCATION: self.education,
            Section.SKILLS: self.skills,
            Section.PROJECTS: self.projects,
            Section.CERTIFICATES: self.certificates,
            Section.LANGUAGES: self.languages,
            Section.SOCIAL_MEDIA: self.social_media,
            Section.INTERESTS: self.interests,
        }[section]


class ResumeSummary(UIModel):
    """Listing projection of a resume for dashboards."""

    resume_id: str
    title: str
    template_id: str
    is_primary: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SaveResumeResult(UIModel):
    """
    Outcome of ResumeRepository.save.

    ``success`` reflects only the metadata write under the best-effort
    policy; per-section failures are listed in ``section_errors``.
    """

    success: bool
    resume_id: Optional[str] = None
    error: Optional[str] = None
    section_errors: dict[str, str] = Field(default_factory=dict)
    embedding_error: Optional[str] = None


class EmbeddingResult(UIModel):
    success: bool
    embedding: Optional[list[float]] = None
    error: Optional[str] = None


class RegenerationResult(UIModel):
    regenerated: bool
    error: Optional[str] = None
