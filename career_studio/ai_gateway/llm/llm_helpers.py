"""llm_helpers.py
Functions to help with initiating a LLMClient class
"""

from typing import Optional

from career_studio.exceptions import LLMConfigError
from career_studio.logging import LoggerFactory
from career_studio.ai_gateway.llm.llm_client import LLMClient

logger = LoggerFactory().get_logger(name="llm_helpers", logger_type="gateway")


def initialize_llm_if_needed(
    llm_client: Optional[LLMClient] = None,
    model: Optional[str] = None,
    function_name: Optional[str] = None,
) -> Optional[LLMClient]:
    """
    Return a ready-to-use LLMClient, or None when no API credential is configured.

    Logic flow:
        1. If an existing `llm_client` is provided validates that it is an instance of `LLMClient`
        and returns it if it is.
        2. Otherwise builds a new LLMClient for `model` and initializes it.
        3. If the provider API key is missing, logs a warning and returns None so callers
        can degrade gracefully instead of failing.

    Args:
        llm_client (Optional[LLMClient]): Existing LLM client instance to use or validate.
        model (Optional[str]): Model ID for a newly built client. Provider default if None.
        function_name (Optional[str]): Name of the operation the client will serve.

    Returns:
        Optional[LLMClient]: A ready-to-use LLMClient instance, or None if the credential is missing.

    Raises:
        TypeError: If `llm_client` is provided but not an instance of `LLMClient`.
        LLMConfigError: If the configuration is invalid for any reason other than a missing key.
        LLMInitializationError: If the provider client cannot be built.
    """
    if llm_client is not None:
        if not isinstance(llm_client, LLMClient):
            raise TypeError("Provided llm_client must be an instance of LLMClient.")
        return llm_client

    try:
        llm_client = LLMClient(model=model, function_name=function_name)
    except LLMConfigError as e:
        if not e.variable_name.endswith("_API_KEY"):
            raise
        logger.warning(f"AI features degraded, no credential configured: {e}")
        return None

    llm_client.initialize_client()

    return llm_client
