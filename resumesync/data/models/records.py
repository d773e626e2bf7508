"""
Storage record models, one per collection.

Column names follow the relational schema the resume builder was designed
against (snake_case, ``display_order`` on every section row). Date columns
hold ISO "YYYY-MM-DD" strings.
"""

from typing import Optional

from pydantic import Field

from .base import BaseDocument, BaseRecord, PyObjectId


class ResumeRecord(BaseDocument):
    """Row of the ``resumes`` metadata collection."""

    user_id: str
    title: str
    template_id: str
    is_primary: bool = False
    embedding: Optional[list[float]] = None


class SectionRecord(BaseRecord):
    """Common columns of every per-resume section row."""

    resume_id: PyObjectId
    display_order: int = Field(default=0, ge=0)


class PersonalDetailsRecord(BaseRecord):
    """Single row per resume; keyed by ``resume_id`` rather than ordered."""

    resume_id: PyObjectId
    fullname: str
    email: str = ""
    phone: str = ""
    age: Optional[int] = None
    location: str = ""
    title: str = ""
    summary: str = ""


class ExperienceRecord(SectionRecord):
    title: str
    company_name: str
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    employment_type: Optional[str] = None
    job_description: Optional[str] = None
    achievements: Optional[str] = None


class EducationRecord(SectionRecord):
    degree: str
    school_name: str
    field_of_study: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    gpa: Optional[float] = None
    honors: Optional[str] = None


class SkillRecord(SectionRecord):
    skill_name: str
    category: Optional[str] = None
    proficiency_level: Optional[str] = None


class ProjectRecord(SectionRecord):
    project_name: str
    description: Optional[str] = None
    technologies_used: Optional[str] = None
    project_link: Optional[str] = None
    demo_url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False


class CertificateRecord(SectionRecord):
    certificate_name: str
    issuing_organization: Optional[str] = None
    issue_date: Optional[str] = None
    expiration_date: Optional[str] = None
    does_not_expire: bool = True
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None


class LanguageRecord(SectionRecord):
    language_name: str
    proficiency: str


class SocialMediaRecord(SectionRecord):
    platform_name: str
    url: str
    username: Optional[str] = None


class InterestRecord(SectionRecord):
    interest_name: str
