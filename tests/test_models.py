"""test_models.py
Test the shared data models.
"""
import dataclasses

import pytest
from pydantic import ValidationError

from career_studio.models import AnalysisResult, Experience, JobApplication, JobStatus

from career_studio.test_helpers.dummy_variables.dummy_records import (
    MOCK_ANALYSIS_RESPONSE,
    MOCK_JOB_WITH_DESCRIPTION,
    MOCK_JOB_WITHOUT_DESCRIPTION,
)


def test_experience_display_dates():
    past = Experience(id="e", start_date="Jan 2020", end_date="Mar 2022")
    current = dataclasses.replace(past, current=True)
    assert past.display_dates() == "Jan 2020 – Mar 2022"
    assert current.display_dates() == "Jan 2020 – Present"


def test_records_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        MOCK_JOB_WITH_DESCRIPTION.company = "Other"


def test_job_status_order_and_values():
    assert [s.value for s in JobStatus] == ["Wishlist", "Applied", "Interviewing", "Offer", "Rejected"]
    assert JobStatus("Offer") is JobStatus.OFFER


def test_job_defaults_to_wishlist():
    job = JobApplication(id="j", company="Acme", position="Dev")
    assert job.status is JobStatus.WISHLIST
    assert job.salary is None


@pytest.mark.parametrize("description,expected", [
    (MOCK_JOB_WITH_DESCRIPTION.job_description, True),
    ("", False),
    ("   \n", False),
])
def test_has_description(description, expected):
    job = dataclasses.replace(MOCK_JOB_WITHOUT_DESCRIPTION, job_description=description)
    assert job.has_description is expected


# ---------------------------------------------------------------------------
# AnalysisResult
# ---------------------------------------------------------------------------
def test_analysis_result_from_wire_names():
    result = AnalysisResult.model_validate(MOCK_ANALYSIS_RESPONSE)
    assert result.score == 82
    assert result.missing_keywords == ["Kubernetes"]


def test_analysis_result_serializes_with_aliases():
    result = AnalysisResult.model_validate(MOCK_ANALYSIS_RESPONSE)
    assert result.model_dump(by_alias=True)["missingKeywords"] == ["Kubernetes"]


def test_analysis_result_accepts_field_names():
    result = AnalysisResult(score=10.5, missing_keywords=[], suggestions=[], summary="Weak")
    assert result.score == 10.5


@pytest.mark.parametrize("override", [
    {"score": "82"},
    {"score": -1},
    {"score": 101},
    {"suggestions": "Add metrics"},
    {"summary": None},
])
def test_analysis_result_rejects_invalid(override):
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate({**MOCK_ANALYSIS_RESPONSE, **override})


def test_analysis_result_schema_uses_wire_names():
    schema = AnalysisResult.model_json_schema(by_alias=True)
    assert set(schema["required"]) == {"score", "missingKeywords", "suggestions", "summary"}
