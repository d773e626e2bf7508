"""
Application-wide constants for resumesync.

Collection names, section identifiers, proficiency vocabularies and
metadata defaults shared by the data and embedding layers.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "resumesync"
VERSION: Final[str] = "0.1.0"

EMBEDDING_DIMENSION: Final[int] = 768


# =============================================================================
# Resume Metadata Defaults
# =============================================================================

DEFAULT_RESUME_TITLE: Final[str] = "Untitled Resume"
DEFAULT_TEMPLATE_ID: Final[str] = "template-a"
UNKNOWN_FULLNAME: Final[str] = "Unknown"


# =============================================================================
# Collections
# =============================================================================

RESUMES_COLLECTION: Final[str] = "resumes"
JOBS_COLLECTION: Final[str] = "jobs"


class Section(str, Enum):
    """The nine sections of a resume aggregate, in save order."""

    PERSONAL_INFO = "personalInfo"
    EXPERIENCES = "experiences"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATES = "certificates"
    LANGUAGES = "languages"
    SOCIAL_MEDIA = "socialMedia"
    INTERESTS = "interests"


SECTION_COLLECTIONS: Final[dict[Section, str]] = {
    Section.PERSONAL_INFO: "resume_personal_details",
    Section.EXPERIENCES: "resume_experience",
    Section.EDUCATION: "resume_education",
    Section.SKILLS: "resume_skills",
    Section.PROJECTS: "resume_projects",
    Section.CERTIFICATES: "resume_certificates",
    Section.LANGUAGES: "resume_languages",
    Section.SOCIAL_MEDIA: "resume_social_media",
    Section.INTERESTS: "resume_interests",
}


# =============================================================================
# Proficiency Vocabularies
# =============================================================================


class SkillProficiency(str, Enum):
    """Skill proficiency levels (UI and storage share this vocabulary)."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class LanguageProficiency(str, Enum):
    """Language proficiency as shown in the UI."""

    ELEMENTARY = "elementary"
    LIMITED = "limited"
    PROFESSIONAL = "professional"
    NATIVE = "native"


class StoredLanguageProficiency(str, Enum):
    """Language proficiency as stored in resume_languages."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    FLUENT = "fluent"
    NATIVE = "native"


LANGUAGE_PROFICIENCY_TO_STORAGE: Final[dict[str, str]] = {
    LanguageProficiency.ELEMENTARY.value: StoredLanguageProficiency.BASIC.value,
    LanguageProficiency.LIMITED.value: StoredLanguageProficiency.INTERMEDIATE.value,
    LanguageProficiency.PROFESSIONAL.value: StoredLanguageProficiency.FLUENT.value,
    LanguageProficiency.NATIVE.value: StoredLanguageProficiency.NATIVE.value,
}

LANGUAGE_PROFICIENCY_FROM_STORAGE: Final[dict[str, str]] = {
    stored: ui for ui, stored in LANGUAGE_PROFICIENCY_TO_STORAGE.items()
}

# Fallbacks for values outside the tables above
DEFAULT_STORED_LANGUAGE_PROFICIENCY: Final[str] = StoredLanguageProficiency.INTERMEDIATE.value
DEFAULT_LANGUAGE_PROFICIENCY: Final[str] = LanguageProficiency.LIMITED.value

# Skills that make it into the "Expert & Advanced" line of the embedding document
TOP_SKILL_LEVELS: Final[frozenset[str]] = frozenset(
    {SkillProficiency.EXPERT.value, SkillProficiency.ADVANCED.value}
)
