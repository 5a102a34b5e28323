"""gateway.py
The AIGateway is the only component allowed to call the generative-language
service. It turns resume / job data into prompts, runs them through LLMClient
and converts replies back into plain text or validated AnalysisResult objects.

Failure policy:
    - Text generation (`generate_summary`, `enhance_bullet`) never raises. A
      missing credential or a failed call yields a degraded text value.
    - Schema-validated analysis (`analyze_match`) and session start
      (`start_interview`) raise an AIGatewayError subclass so the caller can
      show an explicit error.
"""
from typing import Optional

from pydantic import ValidationError

from career_studio.config import APP_DEFAULTS
from career_studio.exceptions import (
    AIServiceError,
    LLMEmptyResponse,
    LLMError,
    MissingCredentialError,
    SchemaViolationError,
)
from career_studio.logging import LoggerFactory, running_under_pytest
from career_studio.models import AnalysisResult, ResumeData

from career_studio.ai_gateway.conversation import ConversationHandle
from career_studio.ai_gateway.llm.llm_client import LLMClient
from career_studio.ai_gateway.llm.llm_helpers import initialize_llm_if_needed
from career_studio.ai_gateway.prompts import (
    build_analysis_prompt,
    build_analysis_system_prompt,
    build_enhance_bullet_prompt,
    build_interviewer_persona,
    build_summary_prompt,
)

MISSING_KEY_MESSAGE = "API Key missing"
SUMMARY_FAILED_MESSAGE = "Failed to generate summary. Please try again."

logger_factory = LoggerFactory()
logger = logger_factory.get_logger(name="ai_gateway", logger_type="gateway")
error_logger = logger_factory.get_logger(name="ai_gateway_errors", logger_type="gateway_error")


class AIGateway:
    """
    Boundary between application state and the external LLM service.

    The provider credential is resolved once, when the gateway is built. If it is
    missing, `llm_client` / `analysis_llm_client` are None and every operation
    follows its missing-credential policy without touching the network.

    Attributes:
        llm_client (Optional[LLMClient]): Client used for summaries, bullet rewrites
            and interview chat.
        analysis_llm_client (Optional[LLMClient]): Client used for match analysis.
            Defaults to a client on APP_DEFAULTS.ANTHROPIC_ANALYSIS_MODEL_ID, or to
            `llm_client` when only that one is injected.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        analysis_llm_client: Optional[LLMClient] = None,
    ):
        self.llm_client = initialize_llm_if_needed(
            llm_client=llm_client,
            model=APP_DEFAULTS.ANTHROPIC_MODEL_ID,
        )

        if analysis_llm_client is None and llm_client is not None:
            analysis_llm_client = llm_client
        self.analysis_llm_client = initialize_llm_if_needed(
            llm_client=analysis_llm_client,
            model=APP_DEFAULTS.ANTHROPIC_ANALYSIS_MODEL_ID,
        )

    @property
    def has_credentials(self) -> bool:
        return self.llm_client is not None and self.analysis_llm_client is not None

    def _log_failure(self, operation: str, error: Exception, propagated: bool = False) -> None:
        """
        Record a failed call. Failures handed back to the caller go to the
        gateway_error logger; ones absorbed by a text fallback are warnings.
        """
        if propagated:
            error_logger.error(f"AI operation '{operation}' failed: {error}")
        else:
            logger.warning(f"AI operation '{operation}' failed, using fallback: {error}")
        if not running_under_pytest():
            logger_factory.get_gateway_operation_logger(operation).warning(str(error))

    # --------------------------------------------------------------
    # Text generation (best effort)
    # --------------------------------------------------------------
    async def generate_summary(self, resume: ResumeData) -> str:
        """
        Write a professional summary from the resume's experience and skills.

        Returns:
            str: The generated summary, MISSING_KEY_MESSAGE when no credential is
                configured, or SUMMARY_FAILED_MESSAGE when the call fails. An empty or
                whitespace-only reply is not a failure and yields "".
        """
        operation = "generate_summary"
        if self.llm_client is None:
            logger.warning(f"{operation}: {MISSING_KEY_MESSAGE}")
            return MISSING_KEY_MESSAGE

        try:
            summary = await self.llm_client.aquery(
                system_prompt=None,
                user_prompt=build_summary_prompt(resume),
                function_name=operation,
            )
        except LLMError as e:
            if isinstance(e.original_exception, LLMEmptyResponse):
                logger.warning(f"{operation}: model returned an empty summary")
                return ""
            self._log_failure(operation, e)
            return SUMMARY_FAILED_MESSAGE

        summary = summary if isinstance(summary, str) else str(summary)
        return summary.strip()

    async def enhance_bullet(self, text: str) -> str:
        """
        Rewrite a single description / bullet for tone and impact.

        Returns the original `text` unchanged on any failure: blank input, missing
        credential, failed or timed out call, or an empty reply.
        """
        operation = "enhance_bullet"
        if not text or not text.strip():
            return text
        if self.llm_client is None:
            logger.warning(f"{operation}: {MISSING_KEY_MESSAGE}, keeping original text")
            return text

        try:
            enhanced = await self.llm_client.aquery(
                system_prompt=None,
                user_prompt=build_enhance_bullet_prompt(text),
                function_name=operation,
            )
        except LLMError as e:
            self._log_failure(operation, e)
            return text

        if not isinstance(enhanced, str) or not enhanced.strip():
            return text
        return enhanced

    # --------------------------------------------------------------
    # Must-succeed operations
    # --------------------------------------------------------------
    async def analyze_match(self, resume: ResumeData, job_description: str) -> AnalysisResult:
        """
        Score how well the resume matches a job description.

        Args:
            resume (ResumeData): Resume to analyze. Sent to the model as JSON.
            job_description (str): Full job description text.

        Returns:
            AnalysisResult: Parsed and strictly validated analysis.

        Raises:
            MissingCredentialError: If no credential is configured.
            AIServiceError: If the service call fails or times out.
            SchemaViolationError: If the reply is not JSON or does not match AnalysisResult.
        """
        operation = "analyze_match"
        if self.analysis_llm_client is None:
            raise MissingCredentialError(operation=operation)

        try:
            response = await self.analysis_llm_client.aquery(
                system_prompt=build_analysis_system_prompt(),
                user_prompt=build_analysis_prompt(resume, job_description),
                expect_json=True,
                function_name=operation,
            )
        except LLMError as e:
            self._log_failure(operation, e, propagated=True)
            raise AIServiceError(operation=operation, original_exception=e)

        if not isinstance(response, dict):
            error = SchemaViolationError(operation=operation, response=response)
            self._log_failure(operation, error, propagated=True)
            raise error

        try:
            return AnalysisResult.model_validate(response)
        except ValidationError as e:
            error = SchemaViolationError(operation=operation, response=response, original_exception=e)
            self._log_failure(operation, error, propagated=True)
            raise error

    def start_interview(self, job_description: str) -> ConversationHandle:
        """
        Open a multi-turn interview context. No request is sent until the first
        `ConversationHandle.send_message()`.

        Raises:
            MissingCredentialError: If no credential is configured.
        """
        if self.llm_client is None:
            raise MissingCredentialError(operation="start_interview")

        return ConversationHandle(
            llm_client=self.llm_client,
            system_prompt=build_interviewer_persona(job_description),
        )
