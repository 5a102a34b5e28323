"""exceptions.py
Defines custom exceptions for this project.
"""
from typing import Optional

# ------------------------ Resume Editor Errors ------------------------
class ResumeEditorError(Exception):
    """Base exception for resume editor errors."""
    pass

class ResumeEntryNotFoundError(ResumeEditorError):
    """Raised when an experience or education entry id is not part of the resume."""
    def __init__(self, section: str, entry_id: str):
        self.section = section
        self.entry_id = entry_id
        super().__init__(f"No {section} entry with id `{entry_id}` exists in the resume.")

# ------------------------ Job Board Errors ------------------------
class JobBoardError(Exception):
    """Base exception for job board errors."""
    pass

class JobNotFoundError(JobBoardError):
    """Raised when a job application id is not present on the board."""
    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"No job application with id `{job_id}` exists on the board.")

class InvalidJobApplicationError(JobBoardError):
    """
    Raised when a job application cannot be added or updated because a
    required field is empty.

    Attributes:
        field_name (str): The offending field.
        message (str): Human-readable description of the error.
    """
    def __init__(self, field_name: str, message: str = "Field must not be empty"):
        self.field_name = field_name
        self.message = message
        super().__init__(f"{message}: {field_name}")

# ------------------------ Interview Session Errors ------------------------
class InterviewSessionError(Exception):
    """Base exception for interview session errors."""
    pass

class MissingJobDescriptionError(InterviewSessionError):
    """Raised when an AI action is requested for a job that has no description."""
    def __init__(self, job_id: str, company: Optional[str] = None, position: Optional[str] = None):
        self.job_id = job_id
        label = f"`{position} at {company}`" if company and position else f"`{job_id}`"
        super().__init__(
            f"Job application {label} has no job description. "
            "Add a job description in the tracker before starting an interview or analysis."
        )

class InterviewNotActiveError(InterviewSessionError):
    """Raised when a turn is submitted while no interview session is active."""
    def __init__(self):
        super().__init__("No interview session is active. Start a session first.")

class InterviewTurnInProgressError(InterviewSessionError):
    """Raised when a turn is submitted while the previous turn's reply is outstanding."""
    def __init__(self):
        super().__init__(
            "The interviewer is still answering the previous message. "
            "Wait for the reply before sending another."
        )

class EmptyInterviewTurnError(InterviewSessionError):
    """Raised when a blank message is submitted to an interview session."""
    def __init__(self):
        super().__init__("Interview messages must contain text.")

# ------------------------ AI Gateway Errors ------------------------
class AIGatewayError(Exception):
    """
    Base exception for failures surfaced by the AIGateway.

    Attributes:
        operation (str | None): Gateway operation that failed (e.g. "analyze_match").
        original_exception (Exception | None): Underlying exception, if any.
    """
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.operation = operation
        self.original_exception = original_exception

        base_msg = message
        if operation:
            base_msg += f" | Operation: {operation}"
        if original_exception:
            base_msg += f" | Original Exception: {original_exception}"
        super().__init__(base_msg)

class MissingCredentialError(AIGatewayError):
    """Raised before any network call when the AI service credential is not configured."""
    def __init__(self, operation: Optional[str] = None):
        super().__init__(
            message="API Key missing. Set ANTHROPIC_API_KEY in your environment or .env file",
            operation=operation,
        )

class AIServiceError(AIGatewayError):
    """Raised when the AI service call fails (network, timeout, provider error, empty reply)."""
    def __init__(
        self,
        operation: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message="AI service request failed",
            operation=operation,
            original_exception=original_exception,
        )

class SchemaViolationError(AIGatewayError):
    """
    Raised when a structured AI response does not match its declared schema.

    Attributes:
        response (object): The raw (possibly parsed) response that failed validation.
    """
    def __init__(
        self,
        operation: Optional[str] = None,
        response: object = None,
        original_exception: Optional[Exception] = None,
    ):
        self.response = response
        super().__init__(
            message="AI response did not match the expected schema",
            operation=operation,
            original_exception=original_exception,
        )

# ------------------------ LLM Querying Errors ------------------------
class LLMConfigError(Exception):
    """Raised when a required configuration (in .env by default) for LLMCLient to function
    is missing or invalid."""

    def __init__(
        self,
        variable_name: str,
        message: str = None,
        extra_info: str = None
    ):
        """
        Args:
            variable_name: Name of the config variable.
            message: Optional custom message for the error.
            extra_info: Additional information to append to the error message.
        """
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        if extra_info:
            message += f" | {extra_info}"
        super().__init__(message)
        self.variable_name = variable_name
        self.extra_info = extra_info

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"

class LLMError(Exception):
    """Base exception for all LLM-related errors."""
    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.model = model
        self.original_exception = original_exception

        base_msg = message
        if provider:
            base_msg += f" | Provider: {provider}"
        if model:
            base_msg += f" | Model: {model}"
        if original_exception:
            base_msg += f" | Original Exception: {original_exception}"

        super().__init__(base_msg)


class LLMInitializationError(LLMError):
    """Raised when the LLM client fails to initialize."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        additional_message: Optional[str] = None
    ):
        message = "Failed to initialize LLM client"
        if additional_message:
            message += f": {additional_message}"
        super().__init__(
            message=message,
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMQueryError(LLMError):
    """Raised when a query to the LLM fails."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Exception = None,
    ):
        message = "LLM query failed"
        if additional_message:
            message += f": {additional_message}"

        super().__init__(
            message=message,
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMEmptyResponse(LLMError):
    """Raised when the LLM returns an empty response."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ):
        super().__init__(
            message="LLM returned an empty response",
            provider=provider,
            model=model,
        )
