"""
Field mapping between the UI resume aggregate and storage records.

Each collection section declares a SectionMapper: the collection it lives
in, the record type, and the two translation functions. Nothing here talks
to the store, so the mapping tables can be tested on their own.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from bson import ObjectId
from pydantic import BaseModel

from resumesync.data.models.records import (
    CertificateRecord,
    EducationRecord,
    ExperienceRecord,
    InterestRecord,
    LanguageRecord,
    PersonalDetailsRecord,
    ProjectRecord,
    SectionRecord,
    SkillRecord,
    SocialMediaRecord,
)
from resumesync.data.models.resume import (
    Certificate,
    Education,
    Experience,
    Interest,
    Language,
    PersonalInfo,
    Project,
    Skill,
    SocialMediaLink,
)
from resumesync.utils.constants import (
    DEFAULT_LANGUAGE_PROFICIENCY,
    DEFAULT_STORED_LANGUAGE_PROFICIENCY,
    LANGUAGE_PROFICIENCY_FROM_STORAGE,
    LANGUAGE_PROFICIENCY_TO_STORAGE,
    SECTION_COLLECTIONS,
    UNKNOWN_FULLNAME,
    Section,
)

TECHNOLOGY_SEPARATOR = ", "


# =============================================================================
# Value helpers
# =============================================================================


def month_to_date(value: Optional[str]) -> Optional[str]:
    """Expand a "YYYY-MM" month to the first day of that month."""
    if not value:
        return None
    if len(value) == 7:
        return f"{value}-01"
    return value


def date_to_month(value: Optional[str]) -> str:
    """Collapse a stored "YYYY-MM-DD" date back to the "YYYY-MM" month the UI edits."""
    if not value:
        return ""
    return value[:7]


def parse_gpa(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def format_gpa(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:g}"


def to_storage_language_proficiency(level: Optional[str]) -> str:
    """Map UI language proficiency (elementary/limited/...) to the stored vocabulary."""
    return LANGUAGE_PROFICIENCY_TO_STORAGE.get(level or "", DEFAULT_STORED_LANGUAGE_PROFICIENCY)


def from_storage_language_proficiency(level: Optional[str]) -> str:
    """Map stored language proficiency back to the UI vocabulary; unknown values read as 'limited'."""
    return LANGUAGE_PROFICIENCY_FROM_STORAGE.get(level or "", DEFAULT_LANGUAGE_PROFICIENCY)


def build_full_name(first_name: str, last_name: str) -> str:
    fullname = f"{first_name or ''} {last_name or ''}".strip()
    return fullname or UNKNOWN_FULLNAME


def split_full_name(fullname: Optional[str]) -> tuple[str, str]:
    """Split on the first space: everything after it is the last name."""
    parts = (fullname or "").split(" ")
    return parts[0], " ".join(parts[1:])


def _or_none(value: Optional[str]) -> Optional[str]:
    return value or None


# =============================================================================
# Personal details (single row)
# =============================================================================


def personal_info_to_record(resume_id: ObjectId, info: PersonalInfo) -> PersonalDetailsRecord:
    return PersonalDetailsRecord(
        resume_id=resume_id,
        fullname=build_full_name(info.first_name, info.last_name),
        email=info.email or "",
        phone=info.phone or "",
        age=None,
        location=info.location or "",
        title=info.title or "",
        summary=info.summary or "",
    )


def personal_info_from_record(record: Optional[PersonalDetailsRecord]) -> PersonalInfo:
    if record is None:
        return PersonalInfo()
    first_name, last_name = split_full_name(record.fullname)
    return PersonalInfo(
        first_name=first_name,
        last_name=last_name,
        email=record.email or "",
        phone=record.phone or "",
        location=record.location or "",
        title=record.title or "",
        summary=record.summary or "",
    )


# =============================================================================
# Collection sections
# =============================================================================


def _experience_to_record(resume_id: ObjectId, exp: Experience, index: int) -> ExperienceRecord:
    return ExperienceRecord(
        resume_id=resume_id,
        title=exp.position,
        company_name=exp.company,
        location=_or_none(exp.location),
        start_date=month_to_date(exp.start_date),
        # current positions never carry an end date
        end_date=None if exp.current else month_to_date(exp.end_date),
        is_current=exp.current,
        employment_type=None,
        job_description=_or_none(exp.description),
        achievements=None,
        display_order=index,
    )


def _experience_from_record(row: ExperienceRecord) -> Experience:
    return Experience(
        id=str(row.id) if row.id else None,
        company=row.company_name,
        position=row.title,
        location=row.location or "",
        start_date=date_to_month(row.start_date),
        end_date=date_to_month(row.end_date),
        current=row.is_current,
        description=row.job_description or "",
    )


def _education_to_record(resume_id: ObjectId, edu: Education, index: int) -> EducationRecord:
    return EducationRecord(
        resume_id=resume_id,
        degree=edu.degree,
        school_name=edu.institution,
        field_of_study=_or_none(edu.field),
        location=_or_none(edu.location),
        start_date=month_to_date(edu.start_date),
        end_date=None if edu.current else month_to_date(edu.end_date),
        is_current=edu.current,
        gpa=parse_gpa(edu.gpa),
        honors=_or_none(edu.description),
        display_order=index,
    )


def _education_from_record(row: EducationRecord) -> Education:
    return Education(
        id=str(row.id) if row.id else None,
        institution=row.school_name,
        degree=row.degree,
        field=row.field_of_study or "",
        location=row.location or "",
        start_date=date_to_month(row.start_date),
        end_date=date_to_month(row.end_date),
        current=row.is_current,
        gpa=format_gpa(row.gpa),
        description=row.honors or "",
    )


def _skill_to_record(resume_id: ObjectId, skill: Skill, index: int) -> SkillRecord:
    return SkillRecord(
        resume_id=resume_id,
        skill_name=skill.name,
        category=_or_none(skill.category),
        proficiency_level=skill.proficiency,
        display_order=index,
    )


def _skill_from_record(row: SkillRecord) -> Skill:
    return Skill(
        id=str(row.id) if row.id else None,
        name=row.skill_name,
        category=row.category or "",
        proficiency=row.proficiency_level,
    )


def _project_to_record(resume_id: ObjectId, project: Project, index: int) -> ProjectRecord:
    return ProjectRecord(
        resume_id=resume_id,
        project_name=project.name,
        description=_or_none(project.description),
        technologies_used=TECHNOLOGY_SEPARATOR.join(project.technologies) or None,
        project_link=_or_none(project.url),
        demo_url=_or_none(project.github),
        start_date=month_to_date(project.start_date),
        end_date=None if project.current else month_to_date(project.end_date),
        is_current=project.current,
        display_order=index,
    )


def _project_from_record(row: ProjectRecord) -> Project:
    technologies = (row.technologies_used or "").split(TECHNOLOGY_SEPARATOR)
    return Project(
        id=str(row.id) if row.id else None,
        name=row.project_name,
        description=row.description or "",
        technologies=[t for t in technologies if t],
        start_date=date_to_month(row.start_date),
        end_date=date_to_month(row.end_date),
        current=row.is_current,
        url=row.project_link or "",
        github=row.demo_url or "",
    )


def _certificate_to_record(resume_id: ObjectId, cert: Certificate, index: int) -> CertificateRecord:
    return CertificateRecord(
        resume_id=resume_id,
        certificate_name=cert.name,
        issuing_organization=_or_none(cert.issuer),
        issue_date=month_to_date(cert.issue_date),
        expiration_date=month_to_date(cert.expiration_date),
        does_not_expire=not cert.expiration_date,
        credential_id=_or_none(cert.credential_id),
        credential_url=_or_none(cert.url),
        display_order=index,
    )


def _certificate_from_record(row: CertificateRecord) -> Certificate:
    return Certificate(
        id=str(row.id) if row.id else None,
        name=row.certificate_name,
        issuer=row.issuing_organization or "",
        issue_date=date_to_month(row.issue_date),
        expiration_date=date_to_month(row.expiration_date),
        credential_id=row.credential_id or "",
        url=row.credential_url or "",
    )


def _language_to_record(resume_id: ObjectId, lang: Language, index: int) -> LanguageRecord:
    return LanguageRecord(
        resume_id=resume_id,
        language_name=lang.name,
        proficiency=to_storage_language_proficiency(lang.proficiency),
        display_order=index,
    )


def _language_from_record(row: LanguageRecord) -> Language:
    return Language(
        id=str(row.id) if row.id else None,
        name=row.language_name,
        proficiency=from_storage_language_proficiency(row.proficiency),
    )


def _social_media_to_record(resume_id: ObjectId, link: SocialMediaLink, index: int) -> SocialMediaRecord:
    return SocialMediaRecord(
        resume_id=resume_id,
        platform_name=link.platform,
        url=link.url,
        username=None,
        display_order=index,
    )


def _social_media_from_record(row: SocialMediaRecord) -> SocialMediaLink:
    return SocialMediaLink(
        id=str(row.id) if row.id else None,
        platform=row.platform_name,
        url=row.url,
    )


def _interest_to_record(resume_id: ObjectId, interest: Interest, index: int) -> InterestRecord:
    return InterestRecord(
        resume_id=resume_id,
        interest_name=interest.name,
        display_order=index,
    )


def _interest_from_record(row: InterestRecord) -> Interest:
    return Interest(id=str(row.id) if row.id else None, name=row.interest_name)


@dataclass(frozen=True)
class SectionMapper:
    """Declared translation for one collection section."""

    section: Section
    record_class: type[SectionRecord]
    to_record: Callable[[ObjectId, Any, int], SectionRecord]
    from_record: Callable[[Any], BaseModel]

    @property
    def collection_name(self) -> str:
        return SECTION_COLLECTIONS[self.section]

    def to_rows(self, resume_id: ObjectId, items: list[Any]) -> list[dict[str, Any]]:
        """Build insertable rows; display_order is the item's list position."""
        return [
            self.to_record(resume_id, item, index).model_dump_mongo(exclude_none=False)
            for index, item in enumerate(items)
        ]

    def from_rows(self, rows: list[dict[str, Any]]) -> list[BaseModel]:
        return [self.from_record(self.record_class.model_validate(row)) for row in rows]


SECTION_MAPPERS: dict[Section, SectionMapper] = {
    Section.EXPERIENCES: SectionMapper(
        Section.EXPERIENCES, ExperienceRecord, _experience_to_record, _experience_from_record
    ),
    Section.EDUCATION: SectionMapper(
        Section.EDUCATION, EducationRecord, _education_to_record, _education_from_record
    ),
    Section.SKILLS: SectionMapper(
        Section.SKILLS, SkillRecord, _skill_to_record, _skill_from_record
    ),
    Section.PROJECTS: SectionMapper(
        Section.PROJECTS, ProjectRecord, _project_to_record, _project_from_record
    ),
    Section.CERTIFICATES: SectionMapper(
        Section.CERTIFICATES, CertificateRecord, _certificate_to_record, _certificate_from_record
    ),
    Section.LANGUAGES: SectionMapper(
        Section.LANGUAGES, LanguageRecord, _language_to_record, _language_from_record
    ),
    Section.SOCIAL_MEDIA: SectionMapper(
        Section.SOCIAL_MEDIA, SocialMediaRecord, _social_media_to_record, _social_media_from_record
    ),
    Section.INTERESTS: SectionMapper(
        Section.INTERESTS, InterestRecord, _interest_to_record, _interest_from_record
    ),
}

# Collection sections in save order (personal details are handled separately)
COLLECTION_SECTIONS: tuple[Section, ...] = tuple(SECTION_MAPPERS)
