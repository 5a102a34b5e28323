"""config.py
Holds various defaults for different career studio settings.
"""

from dataclasses import dataclass, field

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class AppDefaults:
    """
    Default settings for parameters used across the career_studio repo.
    """
    # ---- LLMClient settings ----
    LLM_PROVIDER: str = field(
        default = "anthropic",
        metadata = {
            "description": 'LLM provider: "anthropic"'
    })
    ANTHROPIC_MODEL_ID: str = field(
        default = "claude-haiku-4-5",
        metadata = {
            "description": "Anthropic model ID used for text generation and interview chat"
    })
    ANTHROPIC_ANALYSIS_MODEL_ID: str = field(
        default = "claude-sonnet-4-5",
        metadata = {
            "description": "Anthropic model ID used for resume / job description match analysis"
    })
    LLM_TEMPERATURE: float = field(
        default = 0.5,
        metadata = {
            "description": "Model creativity level (0.0 - 1.0)"
    })
    AI_TIMEOUT_SECONDS: float = field(
        default = 60.0,
        metadata = {
            "description": "Seconds to wait on a single AI service call before giving up"
    })

    # ---- AIGateway settings ----
    INTERVIEW_JD_CHAR_LIMIT: int = field(
        default = 1000,
        metadata = {
            "description": "Number of job description characters embedded in the interviewer persona"
    })

    # ---- API server settings ----
    SERVER_HOST: str = field(
        default = "0.0.0.0",
        metadata = {
            "description": "Host the local API server binds to"
    })
    SERVER_PORT: int = field(
        default = 8001,
        metadata = {
            "description": "Port the local API server listens on"
    })


# Import this where needed
APP_DEFAULTS = AppDefaults()
