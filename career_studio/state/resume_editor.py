"""resume_editor.py
Pure update functions for the resume being edited. Every function returns a
new ResumeData and leaves its input untouched.
"""
from dataclasses import replace
from enum import Enum
from typing import List
import uuid

from career_studio.exceptions import ResumeEntryNotFoundError
from career_studio.models import Education, Experience, ResumeData


class ResumeField(str, Enum):
    """Top-level text fields of a resume that can be edited directly."""
    FULL_NAME = "full_name"
    EMAIL = "email"
    PHONE = "phone"
    LOCATION = "location"
    WEBSITE = "website"
    SUMMARY = "summary"


class ExperienceField(str, Enum):
    """Text fields of an Experience entry. `current` is set via set_experience_current()."""
    COMPANY = "company"
    ROLE = "role"
    START_DATE = "start_date"
    END_DATE = "end_date"
    DESCRIPTION = "description"


class EducationField(str, Enum):
    SCHOOL = "school"
    DEGREE = "degree"
    GRADUATION_DATE = "graduation_date"


def _new_id() -> str:
    return uuid.uuid4().hex


# --------------------------------------------------------------
# Top-level fields
# --------------------------------------------------------------
def update_resume_field(resume: ResumeData, field: ResumeField, value: str) -> ResumeData:
    """Return a copy of `resume` with one top-level text field replaced."""
    field = ResumeField(field)
    return replace(resume, **{field.value: value})


def parse_skills(raw_skills: str) -> List[str]:
    """
    Turn a comma-separated skills string into a list.

    Each entry is trimmed and empty entries are dropped; order is kept and
    duplicates are not removed.

    Example:
        >>> parse_skills("React, TypeScript,  , Go")
        ['React', 'TypeScript', 'Go']
    """
    return [skill.strip() for skill in raw_skills.split(",") if skill.strip()]


def update_skills(resume: ResumeData, raw_skills: str) -> ResumeData:
    return replace(resume, skills=parse_skills(raw_skills))


def reset_resume() -> ResumeData:
    """Return a blank resume."""
    return ResumeData()


# --------------------------------------------------------------
# Experience
# --------------------------------------------------------------
def find_experience(resume: ResumeData, experience_id: str) -> Experience:
    for experience in resume.experience:
        if experience.id == experience_id:
            return experience
    raise ResumeEntryNotFoundError(section="experience", entry_id=experience_id)


def add_experience(resume: ResumeData) -> tuple[ResumeData, Experience]:
    """
    Prepend a new, empty Experience entry.

    Returns:
        tuple[ResumeData, Experience]: The updated resume and the created entry.
    """
    experience = Experience(id=_new_id())
    return replace(resume, experience=[experience, *resume.experience]), experience


def update_experience_field(
    resume: ResumeData,
    experience_id: str,
    field: ExperienceField,
    value: str,
) -> ResumeData:
    """
    Replace one text field of the Experience entry with `experience_id`.

    Raises:
        ResumeEntryNotFoundError: If no entry has `experience_id`.
    """
    field = ExperienceField(field)
    find_experience(resume, experience_id)
    return replace(resume, experience=[
        replace(exp, **{field.value: value}) if exp.id == experience_id else exp
        for exp in resume.experience
    ])


def set_experience_current(resume: ResumeData, experience_id: str, current: bool) -> ResumeData:
    """Mark an Experience entry as the current position (its end date is then ignored)."""
    find_experience(resume, experience_id)
    return replace(resume, experience=[
        replace(exp, current=bool(current)) if exp.id == experience_id else exp
        for exp in resume.experience
    ])


def remove_experience(resume: ResumeData, experience_id: str) -> ResumeData:
    """Remove the Experience entry with `experience_id`. Unknown ids leave the resume unchanged."""
    return replace(resume, experience=[
        exp for exp in resume.experience if exp.id != experience_id
    ])


# --------------------------------------------------------------
# Education
# --------------------------------------------------------------
def find_education(resume: ResumeData, education_id: str) -> Education:
    for education in resume.education:
        if education.id == education_id:
            return education
    raise ResumeEntryNotFoundError(section="education", entry_id=education_id)


def add_education(resume: ResumeData) -> tuple[ResumeData, Education]:
    """Prepend a new, empty Education entry."""
    education = Education(id=_new_id())
    return replace(resume, education=[education, *resume.education]), education


def update_education_field(
    resume: ResumeData,
    education_id: str,
    field: EducationField,
    value: str,
) -> ResumeData:
    field = EducationField(field)
    find_education(resume, education_id)
    return replace(resume, education=[
        replace(edu, **{field.value: value}) if edu.id == education_id else edu
        for edu in resume.education
    ])


def remove_education(resume: ResumeData, education_id: str) -> ResumeData:
    return replace(resume, education=[
        edu for edu in resume.education if edu.id != education_id
    ])
