"""models.py
Holds standardized data models used across various functions.
"""
from typing import List, Literal, Optional
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Resume
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Experience:
    """
    A single work experience entry on a resume.

    Attributes:
        id (str): Identity of the entry, unique within the resume.
        company (str): Employer name.
        role (str): Job title held.
        start_date (str): Free-form start date (e.g. "Jan 2021").
        end_date (str): Free-form end date. Ignored while `current` is True.
        current (bool): Whether this is the candidate's current position.
        description (str): Free-text description / bullet points.
    """
    id: str
    company: str = ""
    role: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    def display_dates(self) -> str:
        """Return the date range as shown on the resume, e.g. "Jan 2021 – Present"."""
        end = "Present" if self.current else self.end_date
        return f"{self.start_date} – {end}"


@dataclass(frozen=True)
class Education:
    """A single education entry on a resume."""
    id: str
    school: str = ""
    degree: str = ""
    graduation_date: str = ""


@dataclass(frozen=True)
class ResumeData:
    """
    Stores the structured contents of the resume being edited.

    Attributes:
        full_name (str): Full name of the candidate.
        email (str): Email address. Not validated.
        phone (str): Phone number. Not validated.
        location (str): City / region.
        website (str): Personal site or profile link.
        summary (str): Professional summary paragraph.
        experience (List[Experience]): Work history, most recently added first.
        education (List[Education]): Education history, most recently added first.
        skills (List[str]): Skills in the order entered. Duplicates are allowed.
    """
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    summary: str = ""
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Job board
# ---------------------------------------------------------------------------
class JobStatus(str, Enum):
    """Kanban columns of the job board, in display order."""
    WISHLIST = "Wishlist"
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER = "Offer"
    REJECTED = "Rejected"


@dataclass(frozen=True)
class JobApplication:
    """
    A tracked job application.

    Attributes:
        id (str): Identity of the application, unique on the board.
        company (str): Company name. Never empty.
        position (str): Position title. Never empty.
        status (JobStatus): Current board column.
        date_applied (str): ISO date the application was added to the board.
        job_description (str): Pasted job description, used by AI analysis and interviews.
        salary (Optional[str]): Free-form salary information.
        notes (Optional[str]): Free-form notes.
    """
    id: str
    company: str
    position: str
    status: JobStatus = JobStatus.WISHLIST
    date_applied: str = ""
    job_description: str = ""
    salary: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_description(self) -> bool:
        return bool(self.job_description and self.job_description.strip())


class AnalysisResult(BaseModel):
    """
    Structured result of matching a resume against a job description.

    Doubles as the response schema sent to the LLM, so field descriptions are
    written as instructions to the model. Validation is strict: a response
    that does not match this shape is rejected as a whole.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, frozen=True)

    score: float = Field(
        ge=0,
        le=100,
        description="Compatibility score from 0 to 100",
    )
    missing_keywords: List[str] = Field(
        alias="missingKeywords",
        description="List of important keywords from the job description missing in the resume",
    )
    suggestions: List[str] = Field(
        description="Actionable advice to improve the resume for this specific job",
    )
    summary: str = Field(description="A brief analysis summary")


# ---------------------------------------------------------------------------
# Interview
# ---------------------------------------------------------------------------
TurnRole = Literal["user", "assistant"]


@dataclass(frozen=True)
class TranscriptTurn:
    """One message in an interview transcript."""
    role: TurnRole
    text: str
