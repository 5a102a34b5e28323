"""job_board.py
Kanban board of job applications. The board is an immutable value and every
operation returns a new JobBoard.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple
import uuid

from career_studio.exceptions import InvalidJobApplicationError, JobNotFoundError
from career_studio.models import AnalysisResult, JobApplication, JobStatus


class JobField(str, Enum):
    """Editable fields of a JobApplication. Status is changed via update_job_status()."""
    COMPANY = "company"
    POSITION = "position"
    DATE_APPLIED = "date_applied"
    JOB_DESCRIPTION = "job_description"
    SALARY = "salary"
    NOTES = "notes"


REQUIRED_JOB_FIELDS = (JobField.COMPANY, JobField.POSITION)


@dataclass(frozen=True)
class JobBoard:
    """
    All tracked job applications plus the detail-view state that refers to them.

    Attributes:
        jobs (Tuple[JobApplication, ...]): Applications in insertion order.
        selected_job_id (Optional[str]): Job shown in the detail panel.
        analysis (Optional[AnalysisResult]): Match analysis for `analysis_job_id`.
        analysis_job_id (Optional[str]): Job the current analysis belongs to.
    """
    jobs: Tuple[JobApplication, ...] = field(default_factory=tuple)
    selected_job_id: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    analysis_job_id: Optional[str] = None

    def get(self, job_id: str) -> JobApplication:
        """
        Raises:
            JobNotFoundError: If `job_id` is not on the board.
        """
        for job in self.jobs:
            if job.id == job_id:
                return job
        raise JobNotFoundError(job_id)

    def __contains__(self, job_id: str) -> bool:
        return any(job.id == job_id for job in self.jobs)

    @property
    def selected_job(self) -> Optional[JobApplication]:
        if self.selected_job_id is None or self.selected_job_id not in self:
            return None
        return self.get(self.selected_job_id)


def _new_job_id(board: JobBoard) -> str:
    job_id = uuid.uuid4().hex
    while job_id in board:
        job_id = uuid.uuid4().hex
    return job_id


def add_job(
    board: JobBoard,
    company: str,
    position: str,
    status: JobStatus = JobStatus.WISHLIST,
    job_description: str = "",
    salary: Optional[str] = None,
    notes: Optional[str] = None,
) -> Tuple[JobBoard, JobApplication]:
    """
    Add a new application to the board.

    Returns:
        Tuple[JobBoard, JobApplication]: The updated board and the created application.

    Raises:
        InvalidJobApplicationError: If company or position is empty.
    """
    if not company or not company.strip():
        raise InvalidJobApplicationError(field_name=JobField.COMPANY.value)
    if not position or not position.strip():
        raise InvalidJobApplicationError(field_name=JobField.POSITION.value)

    job = JobApplication(
        id=_new_job_id(board),
        company=company.strip(),
        position=position.strip(),
        status=JobStatus(status),
        date_applied=date.today().isoformat(),
        job_description=job_description or "",
        salary=salary,
        notes=notes,
    )
    return replace(board, jobs=(*board.jobs, job)), job


def _replace_job(board: JobBoard, job_id: str, **changes) -> JobBoard:
    board.get(job_id)
    return replace(board, jobs=tuple(
        replace(job, **changes) if job.id == job_id else job
        for job in board.jobs
    ))


def update_job_status(board: JobBoard, job_id: str, status: JobStatus) -> JobBoard:
    """
    Move an application to another column.

    Raises:
        JobNotFoundError: If `job_id` is not on the board.
        ValueError: If `status` is not a JobStatus value.
    """
    return _replace_job(board, job_id, status=JobStatus(status))


def update_job_field(board: JobBoard, job_id: str, field: JobField, value: Optional[str]) -> JobBoard:
    """
    Replace one editable field of an application.

    Raises:
        JobNotFoundError: If `job_id` is not on the board.
        InvalidJobApplicationError: If a required field would become empty.
    """
    field = JobField(field)
    if field in REQUIRED_JOB_FIELDS:
        if not value or not value.strip():
            raise InvalidJobApplicationError(field_name=field.value)
        value = value.strip()
    elif field in (JobField.JOB_DESCRIPTION, JobField.DATE_APPLIED):
        value = value or ""

    return _replace_job(board, job_id, **{field.value: value})


def delete_job(board: JobBoard, job_id: str) -> JobBoard:
    """
    Remove an application. Deleting an unknown id is a no-op. Any selection or
    analysis pointing at the deleted job is cleared.
    """
    if job_id not in board:
        return board

    changes = {"jobs": tuple(job for job in board.jobs if job.id != job_id)}
    if board.selected_job_id == job_id:
        changes["selected_job_id"] = None
    if board.analysis_job_id == job_id:
        changes["analysis"] = None
        changes["analysis_job_id"] = None
    return replace(board, **changes)


def select_job(board: JobBoard, job_id: str) -> JobBoard:
    """Open the detail view for a job. Any previous analysis is discarded."""
    board.get(job_id)
    return replace(board, selected_job_id=job_id, analysis=None, analysis_job_id=None)


def clear_selection(board: JobBoard) -> JobBoard:
    return replace(board, selected_job_id=None, analysis=None, analysis_job_id=None)


def set_analysis(board: JobBoard, job_id: str, analysis: Optional[AnalysisResult]) -> JobBoard:
    """
    Attach an analysis result to a job. If the job has been deleted in the
    meantime the result is dropped.
    """
    if job_id not in board:
        return board
    if analysis is None:
        return replace(board, analysis=None, analysis_job_id=None)
    return replace(board, analysis=analysis, analysis_job_id=job_id)


def group_by_status(board: JobBoard) -> Dict[JobStatus, List[JobApplication]]:
    """Board columns in JobStatus order; every status is present, possibly empty."""
    columns: Dict[JobStatus, List[JobApplication]] = {status: [] for status in JobStatus}
    for job in board.jobs:
        columns[job.status].append(job)
    return columns


def count_by_status(board: JobBoard) -> Dict[JobStatus, int]:
    return {status: len(jobs) for status, jobs in group_by_status(board).items()}


def interview_ready_jobs(board: JobBoard) -> List[JobApplication]:
    """Jobs that have a description and can therefore be used for an interview session."""
    return [job for job in board.jobs if job.has_description]
