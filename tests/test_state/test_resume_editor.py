"""test_resume_editor.py
Test the pure resume update functions.
"""
import pytest

from career_studio.exceptions import ResumeEntryNotFoundError
from career_studio.models import ResumeData
from career_studio.state.resume_editor import (
    EducationField,
    ExperienceField,
    ResumeField,
    add_education,
    add_experience,
    find_experience,
    parse_skills,
    remove_education,
    remove_experience,
    reset_resume,
    set_experience_current,
    update_education_field,
    update_experience_field,
    update_resume_field,
    update_skills,
)

from career_studio.test_helpers.dummy_variables.dummy_records import MOCK_RESUME_0


# ---------------------------------------------------------------------------
# Top-level fields and skills
# ---------------------------------------------------------------------------
def test_update_resume_field_returns_new_resume():
    updated = update_resume_field(MOCK_RESUME_0, ResumeField.FULL_NAME, "Jane Roe")
    assert updated.full_name == "Jane Roe"
    assert MOCK_RESUME_0.full_name == "John Doe"
    assert updated.experience == MOCK_RESUME_0.experience


def test_update_resume_field_accepts_raw_value():
    updated = update_resume_field(MOCK_RESUME_0, "summary", "Hello")
    assert updated.summary == "Hello"


def test_update_resume_field_rejects_unknown_field():
    with pytest.raises(ValueError):
        update_resume_field(MOCK_RESUME_0, "skills", "React")


@pytest.mark.parametrize("raw,expected", [
    ("React, TypeScript,  , Go", ["React", "TypeScript", "Go"]),
    ("", []),
    (" , ,", []),
    ("Go,Go", ["Go", "Go"]),
    ("  Python  ", ["Python"]),
])
def test_parse_skills(raw, expected):
    assert parse_skills(raw) == expected


def test_update_skills():
    assert update_skills(ResumeData(), "SQL, dbt").skills == ["SQL", "dbt"]


def test_reset_resume_is_blank():
    assert reset_resume() == ResumeData()


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------
def test_add_experience_prepends_blank_entry():
    updated, experience = add_experience(MOCK_RESUME_0)

    assert updated.experience[0] == experience
    assert experience.company == ""
    assert experience.current is False
    assert len(updated.experience) == len(MOCK_RESUME_0.experience) + 1
    assert experience.id not in {e.id for e in MOCK_RESUME_0.experience}


def test_add_experience_ids_unique():
    resume = ResumeData()
    ids = set()
    for _ in range(20):
        resume, experience = add_experience(resume)
        ids.add(experience.id)
    assert len(ids) == 20


def test_add_then_remove_experience_restores_list():
    updated, experience = add_experience(MOCK_RESUME_0)
    restored = remove_experience(updated, experience.id)
    assert restored.experience == MOCK_RESUME_0.experience


def test_remove_unknown_experience_is_noop():
    assert remove_experience(MOCK_RESUME_0, "missing") == MOCK_RESUME_0


def test_update_experience_field_only_touches_target():
    updated = update_experience_field(MOCK_RESUME_0, "exp-1", ExperienceField.ROLE, "Tech Lead")
    assert find_experience(updated, "exp-1").role == "Tech Lead"
    assert find_experience(updated, "exp-0") == MOCK_RESUME_0.experience[0]


def test_update_experience_field_unknown_id_raises():
    with pytest.raises(ResumeEntryNotFoundError) as e:
        update_experience_field(MOCK_RESUME_0, "missing", ExperienceField.ROLE, "x")
    assert e.value.section == "experience"
    assert e.value.entry_id == "missing"


def test_set_experience_current_shows_present():
    updated = set_experience_current(MOCK_RESUME_0, "exp-1", True)
    experience = find_experience(updated, "exp-1")
    assert experience.current is True
    # End date is kept but no longer displayed
    assert experience.end_date == "Dec 2020"
    assert experience.display_dates() == "Jun 2018 – Present"


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------
def test_education_add_update_remove():
    updated, education = add_education(MOCK_RESUME_0)
    assert updated.education[0] == education

    updated = update_education_field(updated, education.id, EducationField.SCHOOL, "MIT")
    assert updated.education[0].school == "MIT"

    restored = remove_education(updated, education.id)
    assert restored.education == MOCK_RESUME_0.education


def test_update_education_unknown_id_raises():
    with pytest.raises(ResumeEntryNotFoundError):
        update_education_field(MOCK_RESUME_0, "missing", EducationField.DEGREE, "PhD")
