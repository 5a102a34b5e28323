"""app_store.py
Top-level application state: the resume being edited, the job board and the
interview session manager, plus the "in progress" flags shown by the UI.
"""
from typing import List, Optional

from career_studio.exceptions import MissingJobDescriptionError
from career_studio.logging import LoggerFactory
from career_studio.models import (
    AnalysisResult,
    Experience,
    Education,
    JobApplication,
    JobStatus,
    ResumeData,
    TranscriptTurn,
)

from career_studio.ai_gateway.gateway import AIGateway
from career_studio.state import job_board, resume_editor
from career_studio.state.interview_session import InterviewSession, InterviewSessionManager
from career_studio.state.job_board import JobBoard, JobField
from career_studio.state.resume_editor import EducationField, ExperienceField, ResumeField

logger = LoggerFactory().get_logger(name="app_store")


class AppStore:
    """
    Owns all state for one running session. User actions replace `resume` and
    `board` with the values returned by the pure update functions in
    `resume_editor` and `job_board`; AI actions go through `gateway`.

    Every AI action resets its in-progress flag in a `finally` block, so a
    failed or cancelled call never leaves the UI loading.

    Attributes:
        gateway (AIGateway): The AI service boundary.
        resume (ResumeData): Resume being edited.
        board (JobBoard): Tracked job applications and detail view state.
        interview (InterviewSessionManager): Interview simulator state.
        is_generating_summary (bool): Summary generation in progress.
        enhancing_experience_id (Optional[str]): Experience entry being rewritten.
        analyzing_job_id (Optional[str]): Job whose match analysis is in progress.
            Only the most recent analysis request may set or clear it.
    """

    def __init__(self, gateway: Optional[AIGateway] = None):
        self.gateway = gateway if gateway is not None else AIGateway()
        self.resume = ResumeData()
        self.board = JobBoard()
        self.interview = InterviewSessionManager(self.gateway)

        self.is_generating_summary = False
        self.enhancing_experience_id: Optional[str] = None
        self.analyzing_job_id: Optional[str] = None
        # Bumped on every analysis request and on navigation; stale results are dropped
        self._analysis_request = 0

    # --------------------------------------------------------------
    # Resume editor
    # --------------------------------------------------------------
    def update_resume_field(self, field: ResumeField, value: str) -> ResumeData:
        self.resume = resume_editor.update_resume_field(self.resume, field, value)
        return self.resume

    def update_skills(self, raw_skills: str) -> ResumeData:
        self.resume = resume_editor.update_skills(self.resume, raw_skills)
        return self.resume

    def reset_resume(self) -> ResumeData:
        self.resume = resume_editor.reset_resume()
        return self.resume

    def add_experience(self) -> Experience:
        self.resume, experience = resume_editor.add_experience(self.resume)
        return experience

    def update_experience_field(self, experience_id: str, field: ExperienceField, value: str) -> ResumeData:
        self.resume = resume_editor.update_experience_field(self.resume, experience_id, field, value)
        return self.resume

    def set_experience_current(self, experience_id: str, current: bool) -> ResumeData:
        self.resume = resume_editor.set_experience_current(self.resume, experience_id, current)
        return self.resume

    def remove_experience(self, experience_id: str) -> ResumeData:
        self.resume = resume_editor.remove_experience(self.resume, experience_id)
        return self.resume

    def add_education(self) -> Education:
        self.resume, education = resume_editor.add_education(self.resume)
        return education

    def update_education_field(self, education_id: str, field: EducationField, value: str) -> ResumeData:
        self.resume = resume_editor.update_education_field(self.resume, education_id, field, value)
        return self.resume

    def remove_education(self, education_id: str) -> ResumeData:
        self.resume = resume_editor.remove_education(self.resume, education_id)
        return self.resume

    async def generate_summary(self) -> ResumeData:
        """Replace the resume summary with an AI generated one (or the gateway's fallback text)."""
        self.is_generating_summary = True
        try:
            summary = await self.gateway.generate_summary(self.resume)
        finally:
            self.is_generating_summary = False

        self.resume = resume_editor.update_resume_field(self.resume, ResumeField.SUMMARY, summary)
        return self.resume

    async def enhance_experience(self, experience_id: str) -> ResumeData:
        """
        Rewrite an experience description with AI. If the entry is removed while
        the call is outstanding, the result is dropped.

        Raises:
            ResumeEntryNotFoundError: If `experience_id` is not in the resume.
        """
        experience = resume_editor.find_experience(self.resume, experience_id)

        self.enhancing_experience_id = experience_id
        try:
            enhanced = await self.gateway.enhance_bullet(experience.description)
        finally:
            self.enhancing_experience_id = None

        if any(exp.id == experience_id for exp in self.resume.experience):
            self.resume = resume_editor.update_experience_field(
                self.resume, experience_id, ExperienceField.DESCRIPTION, enhanced
            )
        return self.resume

    # --------------------------------------------------------------
    # Job board
    # --------------------------------------------------------------
    def add_job(
        self,
        company: str,
        position: str,
        status: JobStatus = JobStatus.WISHLIST,
        job_description: str = "",
        salary: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> JobApplication:
        self.board, job = job_board.add_job(
            self.board,
            company=company,
            position=position,
            status=status,
            job_description=job_description,
            salary=salary,
            notes=notes,
        )
        logger.info(f"Added job `{job.id}` ({job.position} at {job.company}) to {job.status.value}")
        return job

    def update_job_status(self, job_id: str, status: JobStatus) -> JobApplication:
        self.board = job_board.update_job_status(self.board, job_id, status)
        return self.board.get(job_id)

    def update_job_field(self, job_id: str, field: JobField, value: Optional[str]) -> JobApplication:
        self.board = job_board.update_job_field(self.board, job_id, field, value)
        return self.board.get(job_id)

    def delete_job(self, job_id: str) -> JobBoard:
        """
        Delete a job (no-op for unknown ids). An interview session bound to the
        job is ended; an interview selection pointing at it is cleared. A session
        for any other job keeps running.
        """
        self.board = job_board.delete_job(self.board, job_id)

        if self.interview.session_job_id == job_id:
            self.interview.end()
        elif self.interview.selected_job_id == job_id:
            self.interview.selected_job_id = None
        return self.board

    def _discard_pending_analysis(self) -> None:
        self._analysis_request += 1
        self.analyzing_job_id = None

    def select_job(self, job_id: str) -> JobApplication:
        """Open a job's detail view. An analysis still running for the previous view is discarded."""
        self.board = job_board.select_job(self.board, job_id)
        self._discard_pending_analysis()
        return self.board.get(job_id)

    def clear_job_selection(self) -> JobBoard:
        self.board = job_board.clear_selection(self.board)
        self._discard_pending_analysis()
        return self.board

    async def analyze_job(self, job_id: str) -> AnalysisResult:
        """
        Run an AI match analysis of the resume against a job's description.

        Any previous analysis is cleared first and is not restored on failure.
        Only the latest request is kept: if the user navigates or starts another
        analysis before this one returns, the result is returned to the caller
        but not stored on the board.

        Raises:
            JobNotFoundError: If `job_id` is not on the board.
            MissingJobDescriptionError: If the job has no description.
            AIGatewayError: If the analysis fails (see AIGateway.analyze_match()).
        """
        job = self.board.get(job_id)
        if not job.has_description:
            raise MissingJobDescriptionError(job.id, job.company, job.position)

        self._analysis_request += 1
        request = self._analysis_request
        self.board = job_board.set_analysis(self.board, job_id, None)
        self.analyzing_job_id = job_id
        try:
            result = await self.gateway.analyze_match(self.resume, job.job_description)
        finally:
            if request == self._analysis_request:
                self.analyzing_job_id = None

        if request != self._analysis_request:
            logger.info(f"Dropped superseded analysis for job `{job_id}`")
            return result

        self.board = job_board.set_analysis(self.board, job_id, result)
        return result

    # --------------------------------------------------------------
    # Interview simulator
    # --------------------------------------------------------------
    def interview_ready_jobs(self) -> List[JobApplication]:
        return job_board.interview_ready_jobs(self.board)

    def select_interview_job(self, job_id: str) -> Optional[str]:
        """
        Returns:
            Optional[str]: Warning to display if the job cannot be interviewed for.
        """
        return self.interview.select_job(self.board.get(job_id))

    async def start_interview(self, job_id: str) -> InterviewSession:
        return await self.interview.start(self.board.get(job_id))

    async def submit_interview_answer(self, text: str) -> Optional[TranscriptTurn]:
        return await self.interview.submit(text)

    def end_interview(self) -> None:
        self.interview.end()
