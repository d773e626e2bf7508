"""
Text formatting of resumes and job postings for embedding.

Both documents use the same four-part layout so the two kinds of vectors
are comparable: skills first, then experience or responsibilities, then
core requirements, then additional context. Sections are bracket-labelled
and separated by a blank line. The output depends only on the input.
"""

from resumesync.data.models import JobPosting, ResumeData
from resumesync.utils.constants import TOP_SKILL_LEVELS

TOP_SKILLS = "[TOP SKILLS]"
EXPERIENCE = "[EXPERIENCE]"
RESPONSIBILITIES = "[RESPONSIBILITIES]"
CORE_REQUIREMENTS = "[CORE REQUIREMENTS]"
ADDITIONAL_CONTEXT = "[ADDITIONAL CONTEXT]"

SECTION_SEPARATOR = "\n\n"


def _section(label: str, lines: list[str]) -> str:
    return "\n".join([label, *lines])


def _or_none(values: list[str]) -> str:
    return ", ".join(values) or "None"


# =============================================================================
# Resume
# =============================================================================


def format_resume(resume: ResumeData) -> str:
    """
    Render a resume as an embedding document.

    Only non-empty sections are emitted; TOP SKILLS requires at least one
    skill.
    """
    sections: list[str] = []
    info = resume.personal_info

    if resume.skills:
        top_skills = [s.name for s in resume.skills if s.proficiency in TOP_SKILL_LEVELS]
        all_skills = [s.name for s in resume.skills]
        sections.append(
            _section(
                TOP_SKILLS,
                [f"Expert & Advanced: {_or_none(top_skills)}", f"All Skills: {_or_none(all_skills)}"],
            )
        )

    if resume.experiences:
        lines = []
        for exp in resume.experiences:
            end = "Present" if exp.current else (exp.end_date or "N/A")
            lines.append(
                f"{exp.position} at {exp.company} ({exp.start_date} - {end}): "
                f"{exp.description or 'No description'}"
            )
        sections.append(_section(EXPERIENCE, lines))

    core: list[str] = []
    if info.summary:
        core.append(f"Summary: {info.summary}")
    if info.title:
        core.append(f"Title: {info.title}")
    if resume.education:
        education = "; ".join(
            f"{edu.degree} in {edu.field} from {edu.institution}" for edu in resume.education
        )
        core.append(f"Education: {education}")
    if resume.languages:
        languages = ", ".join(f"{lang.name} ({lang.proficiency})" for lang in resume.languages)
        core.append(f"Languages: {languages}")
    if core:
        sections.append(_section(CORE_REQUIREMENTS, core))

    context: list[str] = []
    if resume.projects:
        projects = "; ".join(
            f"{p.name}: {p.description} (Tech: {', '.join(p.technologies)})" for p in resume.projects
        )
        context.append(f"Projects: {projects}")
    if resume.certificates:
        certificates = ", ".join(f"{c.name} by {c.issuer}" for c in resume.certificates)
        context.append(f"Certificates: {certificates}")
    if resume.interests:
        context.append(f"Interests: {', '.join(i.name for i in resume.interests)}")
    if context:
        sections.append(_section(ADDITIONAL_CONTEXT, context))

    return SECTION_SEPARATOR.join(sections)


# =============================================================================
# Job posting
# =============================================================================


def _years_of_experience(job: JobPosting) -> str:
    if job.years_of_experience_max is not None:
        return f"{job.years_of_experience_min}-{job.years_of_experience_max} years"
    return f"{job.years_of_experience_min}+ years"


def format_job(job: JobPosting) -> str:
    """Render a job posting as an embedding document."""
    sections: list[str] = [
        _section(
            TOP_SKILLS,
            [
                f"Must-Have: {_or_none(job.must_have_skills)}",
                f"Nice-to-Have: {_or_none(job.nice_to_have_skills)}",
            ],
        )
    ]

    if job.responsibilities:
        sections.append(_section(RESPONSIBILITIES, job.responsibilities))

    core = [f"Title: {job.job_title}"]
    if job.job_summary:
        core.append(f"Summary: {job.job_summary}")
    if job.experience_level:
        core.append(f"Experience Level: {job.experience_level}")
    if job.years_of_experience_min is not None:
        core.append(f"Years of Experience: {_years_of_experience(job)}")
    if job.required_education_level:
        core.append(f"Education: {job.required_education_level}")
    if job.qualifications:
        core.append(f"Qualifications: {', '.join(job.qualifications)}")
    sections.append(_section(CORE_REQUIREMENTS, core))

    context = [f"Company: {job.company_name}", f"Location: {job.location}"]
    optional = (
        ("Employment Type", job.employment_type),
        ("Remote Type", job.remote_type),
        ("Company Size", job.company_size),
        ("Industry", job.industry),
    )
    context.extend(f"{label}: {value}" for label, value in optional if value)
    if job.benefits:
        context.append(f"Benefits: {', '.join(job.benefits)}")
    sections.append(_section(ADDITIONAL_CONTEXT, context))

    return SECTION_SEPARATOR.join(sections)
