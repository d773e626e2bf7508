"""
Structural staleness check for resume embeddings.

Compares a cheap projection of two resumes instead of the full text.
Description edits, reordering and proficiency changes are not detected.
"""

from dataclasses import dataclass

from resumesync.data.models import ResumeData


@dataclass(frozen=True)
class ChangeSignature:
    """The parts of a resume whose change invalidates its embedding."""

    skill_names: frozenset[str]
    skill_count: int
    experience_count: int
    education_count: int
    project_count: int
    certificate_count: int
    language_count: int
    summary: str
    title: str

    @classmethod
    def from_resume(cls, resume: ResumeData) -> "ChangeSignature":
        return cls(
            skill_names=frozenset(s.name for s in resume.skills),
            skill_count=len(resume.skills),
            experience_count=len(resume.experiences),
            education_count=len(resume.education),
            project_count=len(resume.projects),
            certificate_count=len(resume.certificates),
            language_count=len(resume.languages),
            summary=resume.personal_info.summary,
            title=resume.personal_info.title,
        )


def should_regenerate(old: ResumeData, new: ResumeData) -> bool:
    """True when the two resumes differ in any signature field."""
    return ChangeSignature.from_resume(old) != ChangeSignature.from_resume(new)
