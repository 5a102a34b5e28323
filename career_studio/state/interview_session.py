"""interview_session.py
Interview simulator state: one InterviewSession per active mock interview and
the InterviewSessionManager that enforces Idle -> Active -> Idle transitions.
"""
import asyncio
from typing import List, Literal, Optional

from career_studio.exceptions import (
    AIServiceError,
    EmptyInterviewTurnError,
    InterviewNotActiveError,
    InterviewTurnInProgressError,
    MissingJobDescriptionError,
)
from career_studio.logging import LoggerFactory
from career_studio.models import JobApplication, TranscriptTurn

from career_studio.ai_gateway.conversation import ConversationHandle
from career_studio.ai_gateway.gateway import AIGateway
from career_studio.ai_gateway.prompts import INTERVIEW_OPENING_MESSAGE

DEFAULT_GREETING = "Hello! I'm ready to interview you. Tell me about yourself."
EMPTY_REPLY_MESSAGE = "I didn't catch that."
TURN_FAILED_MESSAGE = "Error communicating with AI."

logger = LoggerFactory().get_logger(name="interview_session", logger_type="gateway")


class InterviewSession:
    """
    One mock interview bound to a single job application.

    Turns are strictly sequential: while a reply is outstanding `is_busy` is
    True and further submissions are rejected. Closing the session cancels the
    outstanding call and any late reply is dropped.

    Attributes:
        job (JobApplication): The job being interviewed for.
        handle (Optional[ConversationHandle]): Multi-turn AI context. None once closed.
        transcript (List[TranscriptTurn]): Visible conversation, oldest first.
        is_busy (bool): Whether a reply is outstanding.
        is_closed (bool): Whether the session has been ended.
    """

    def __init__(self, job: JobApplication, handle: ConversationHandle):
        self.job = job
        self.handle = handle
        self.transcript: List[TranscriptTurn] = []
        self.is_busy = False
        self.is_closed = False
        self._inflight: Optional[asyncio.Future] = None

    async def _request_reply(self, text: str) -> str:
        self._inflight = asyncio.ensure_future(self.handle.send_message(text))
        try:
            return await self._inflight
        finally:
            self._inflight = None

    async def open(self) -> TranscriptTurn:
        """
        Send the hidden opening message and record the interviewer's first
        question as transcript entry 0.

        Raises:
            AIServiceError: If the opening call fails.
            InterviewNotActiveError: If the session is closed before the reply arrives.
        """
        self.is_busy = True
        try:
            reply = await self._request_reply(INTERVIEW_OPENING_MESSAGE)
        except asyncio.CancelledError:
            if self.is_closed:
                raise InterviewNotActiveError() from None
            raise
        finally:
            self.is_busy = False

        if self.is_closed:
            raise InterviewNotActiveError()

        turn = TranscriptTurn(role="assistant", text=reply if reply.strip() else DEFAULT_GREETING)
        self.transcript = [turn]
        return turn

    async def submit(self, text: str) -> Optional[TranscriptTurn]:
        """
        Append the user's answer and wait for the interviewer's reply.

        The user turn is recorded immediately. A failed call records
        TURN_FAILED_MESSAGE instead of raising.

        Returns:
            Optional[TranscriptTurn]: The assistant turn, or None if the session was
                ended while the reply was outstanding.

        Raises:
            InterviewNotActiveError: If the session has been closed.
            EmptyInterviewTurnError: If `text` is blank.
            InterviewTurnInProgressError: If a previous turn is still outstanding.
        """
        if self.is_closed:
            raise InterviewNotActiveError()
        if not text or not text.strip():
            raise EmptyInterviewTurnError()
        if self.is_busy:
            raise InterviewTurnInProgressError()

        self.is_busy = True
        self.transcript.append(TranscriptTurn(role="user", text=text))
        try:
            try:
                reply = await self._request_reply(text)
                reply_text = reply if reply.strip() else EMPTY_REPLY_MESSAGE
            except AIServiceError as e:
                logger.error(f"Interview turn failed for job `{self.job.id}`: {e}")
                reply_text = TURN_FAILED_MESSAGE
            except asyncio.CancelledError:
                if self.is_closed:
                    return None
                raise

            if self.is_closed:
                return None

            turn = TranscriptTurn(role="assistant", text=reply_text)
            self.transcript.append(turn)
            return turn
        finally:
            self.is_busy = False

    def close(self) -> None:
        """Cancel any outstanding call and discard the transcript and AI context."""
        self.is_closed = True
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self.transcript = []
        self.handle = None


class InterviewSessionManager:
    """
    Owns at most one InterviewSession at a time.

    State machine:
        Idle   --start(job)--> Active
        Active --end()-------> Idle

    Attributes:
        gateway (AIGateway): Source of conversation handles.
        session (Optional[InterviewSession]): The active session, if any.
        selected_job_id (Optional[str]): Job picked in the interview view.
    """

    def __init__(self, gateway: AIGateway):
        self.gateway = gateway
        self.session: Optional[InterviewSession] = None
        self.selected_job_id: Optional[str] = None
        self._starting: Optional[InterviewSession] = None

    @property
    def state(self) -> Literal["idle", "starting", "active"]:
        if self.session is not None:
            return "active"
        if self._starting is not None:
            return "starting"
        return "idle"

    @property
    def is_active(self) -> bool:
        return self.session is not None

    @property
    def session_job_id(self) -> Optional[str]:
        """Job bound to the active or starting session, if any."""
        session = self.session or self._starting
        return session.job.id if session else None

    def select_job(self, job: Optional[JobApplication]) -> Optional[str]:
        """
        Select the job to interview for.

        Returns:
            Optional[str]: A warning to display if the job cannot be used for a session.
        """
        self.selected_job_id = job.id if job else None
        if job is not None and not job.has_description:
            return str(MissingJobDescriptionError(job.id, job.company, job.position))
        return None

    async def start(self, job: JobApplication) -> InterviewSession:
        """
        Start a new session for `job`, replacing any existing one.

        Raises:
            MissingJobDescriptionError: If the job has no description. No AI call is made.
            InterviewTurnInProgressError: If another session is still starting.
            MissingCredentialError: If no AI credential is configured.
            AIServiceError: If the opening call fails.
        """
        self.selected_job_id = job.id
        if not job.has_description:
            raise MissingJobDescriptionError(job.id, job.company, job.position)
        if self._starting is not None:
            raise InterviewTurnInProgressError()

        self._close_session()

        handle = self.gateway.start_interview(job.job_description)
        session = InterviewSession(job=job, handle=handle)
        self._starting = session
        try:
            await session.open()
        finally:
            if self._starting is session:
                self._starting = None

        self.session = session
        logger.info(f"Interview session started for job `{job.id}` ({job.position} at {job.company})")
        return session

    async def submit(self, text: str) -> Optional[TranscriptTurn]:
        """
        Raises:
            InterviewNotActiveError: If no session is active.
        """
        if self.session is None:
            raise InterviewNotActiveError()
        return await self.session.submit(text)

    def _close_session(self) -> None:
        for session in (self.session, self._starting):
            if session is not None:
                session.close()
        self.session = None
        self._starting = None

    def end(self) -> None:
        """End the session (if any) and reset the job selection."""
        if self.session is not None:
            logger.info(f"Interview session ended for job `{self.session.job.id}`")
        self._close_session()
        self.selected_job_id = None

    @property
    def transcript(self) -> List[TranscriptTurn]:
        return list(self.session.transcript) if self.session else []
