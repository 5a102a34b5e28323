"""
llm_client.py

Universal LangChain-based client for multiple LLM providers.
Supports Anthropic (Claude).
Includes configuration validation, flexible prompting, multi-turn history,
per-call timeouts and optional JSON parsing.
"""
import asyncio
import json
import os
import re
from typing import Optional, List, Literal
import warnings

from dotenv import load_dotenv

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from career_studio.config import APP_DEFAULTS
from career_studio.exceptions import (
    LLMConfigError,
    LLMInitializationError,
    LLMQueryError,
    LLMEmptyResponse
)
from career_studio.test_helpers.llm_client_test_helpers import (
    create_mock_llm_response
)

SUPPORTED_PROVIDERS = ["anthropic"]
load_dotenv()

class LLMClient:
    """
    A flexible, provider-agnostic client for interacting with large language models (LLMs)
    through the LangChain interface. Must be "initialized" using "initialize_client()" function
    before it can be used to make queries.

    Handles:
        - Pulling API keys from .env file
        - Resolving provider, model ID, and API keys
        - Validating configuration
        - Bounding every call with a timeout
        - Optional test mode with deterministic responses
        - Integration with LangChain clients (Anthropic)

    Initialization uses defaults from `APP_DEFAULTS` if values are not provided.

    Attributes:
        provider (Optional[str]): Name of the LLM provider (e.g., "anthropic"). Defaults
            to APP_DEFAULTS.LLM_PROVIDER.
        model (Optional[str]): Model identifier or name. If none provided then will automatically match
            the provided provider to its APP_DEFAULTS default model name.
        api_key (Optional[str]): Provider-specific API key used for authentication pulled from .env. Will
            automatically match to selected provider. None in test mode when no key is set.
        function_name (Optional[str]): Name of the gateway operation invoking the LLM. Selects the
            canned reply in test mode.
        fallback_message (Optional[str]): Default message returned when the model response is empty.
        timeout_seconds (float): Maximum seconds to wait on a single query.
        test_mode (bool): If True, returns mock responses instead of making real API calls.
        test_response_type (str): Mock response type used in test mode.
        client (Any): Initialized LangChain chat model client.

    Raises:
        LLMConfigError: If required environment variables are missing or invalid.
        LLMInitializationError: If the model client cannot be initialized.
        LLMQueryError: If a query fails or times out during execution.

    Example:
        >>> client = LLMClient(provider="anthropic", model="claude-haiku-4-5")
        >>> client.initialize_client()
        >>> response = await client.aquery(
        ...     system_prompt="You are a helpful assistant.",
        ...     user_prompt="Summarize this paragraph.",
        ... )
        >>> print(response)
        'Here’s a concise summary of the paragraph...'
    """

    def __init__(
        self,
        provider: Optional[str] = APP_DEFAULTS.LLM_PROVIDER,
        model: Optional[str] = None,
        function_name: Optional[str] = None,
        fallback_message: Optional[str] = None,
        timeout_seconds: float = APP_DEFAULTS.AI_TIMEOUT_SECONDS,
        test_mode: Optional[bool] = False,
        test_response_type: Literal["success", "failed", "unexpected_json", "not_json", "empty"] = "success",
    ):
        """Initialize an LLMClient instance and resolve provider-specific configuration.

        Args:
            provider (Optional[str], optional): Name of the LLM provider (e.g., "anthropic").
                Defaults to `APP_DEFAULTS.LLM_PROVIDER`.
            model (Optional[str], optional): Model identifier to use for the provider.
                If None, the default model from APP_DEFAULTS will be used.
            function_name (Optional[str], optional): Name of the operation invoking the LLM.
                Used for logging and to select mock replies in test mode. Defaults to None.
            fallback_message (Optional[str], optional): Message to return if the model response is empty.
                Defaults to None.
            timeout_seconds (float, optional): Seconds to wait for a reply before raising
                LLMQueryError. Defaults to `APP_DEFAULTS.AI_TIMEOUT_SECONDS`.
            test_mode (Optional[bool], optional): If True, the client will return deterministic mock responses
                instead of querying the live LLM. Defaults to False.
            test_response_type (Literal["success", "failed", "unexpected_json", "not_json", "empty"], optional):
                Type of mock response to use when `test_mode` is True. Defaults to "success".
        """
        self.function_name = function_name
        self.fallback_message = fallback_message
        self.timeout_seconds = timeout_seconds
        self.test_mode = test_mode
        self.test_response_type = test_response_type

        # --- Resolve configuration ---
        self.provider = provider
        self._resolve_provider()

        self._resolve_model(model)
        self._resolve_api_key()

        # Only fill client when `initialize_client()` is run
        self.client = None

    # --- Init helpers ---
    def _resolve_provider(self) -> None:
        """
        Validate that self.provider is valid and supported LLM provider in this class.

        Raises:
            LLMConfigError: If the provider is not one of the supported providers.
        """
        if self.provider not in SUPPORTED_PROVIDERS:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                extra_info=f"Choices are: {SUPPORTED_PROVIDERS}"
            )

    def _resolve_model(self, model: Optional[str]) -> None:
        """
        Resolve and set the model ID for the selected provider.
        - Uses the `model` parameter if provided.
        - Otherwise, falls back to the default model ID from `APP_DEFAULTS`.

        Raises:
            LLMConfigError: If no model ID is provided or available for the selected provider.
        """
        default_models = {
            "anthropic": APP_DEFAULTS.ANTHROPIC_MODEL_ID,
        }

        resolved_model = model or default_models.get(self.provider)
        if not resolved_model:
            raise LLMConfigError(
                variable_name=f"{self.provider}_MODEL_ID",
                message=(
                    f"You must provide a model ID for `{self.provider}` either via APP_DEFAULTS "
                    "or by explicitly passing `model` when initializing LLMClient."
                )
            )

        self.model = resolved_model

    def _resolve_api_key(self) -> None:
        """
        Retrieve and validate the API key for the selected provider from environment variables.
        Does not check if the API key is valid, simply loads it. In test mode a missing key
        is tolerated since no live calls are made.

        Raises:
            LLMConfigError: If the API key is missing or the provider is invalid.
        """
        api_key_map = {
            "anthropic": "ANTHROPIC_API_KEY",
        }

        key_name = api_key_map.get(self.provider)
        if not key_name:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                message=f"No API key mapping defined for provider `{self.provider}`"
            )

        api_key = os.getenv(key_name)
        if not api_key or api_key == "<REPLACE_ME>":
            if self.test_mode:
                self.api_key = None
                return
            raise LLMConfigError(
                variable_name=f"{self.provider}_API_KEY",
                message=(
                    f"You must set a `{self.provider}` API key in your environment variables "
                    "to run LLM queries to their services."
                )
            )

        self.api_key = api_key

    def initialize_client(self) -> None:
        """
        Initialize the LangChain chat model client for the selected provider.
        - Imports the provider-specific client dynamically.
        - Initializes the client using the resolved `self.model` and `self.api_key`.
        - Assigns the initialized client to `self.client`.
        - Skipped in test mode, where no provider client is needed.

        Notes:
            - No API call is made during initialization, so this method does not incur costs.

        Raises:
            LLMConfigError: If the provider is not supported.
            LLMInitializationError: If the client cannot be initialized due to an internal error.

        Example:
            >>> client = LLMClient(provider="anthropic")
            >>> client.initialize_client()
            >>> isinstance(client.client, ChatAnthropic)
            True
        """
        if self.test_mode:
            return

        try:
            if self.provider == "anthropic":
                from langchain_anthropic import ChatAnthropic
                self.client = ChatAnthropic(
                    model=self.model,
                    anthropic_api_key=self.api_key,
                    temperature=APP_DEFAULTS.LLM_TEMPERATURE
                )
            else:
                raise LLMConfigError(
                    variable_name="LLM_PROVIDER",
                    extra_info=f"Unsupported provider: {self.provider}"
                )
        except Exception as e:
            raise LLMInitializationError(
                provider=self.provider,
                model=self.model,
                original_exception=e
            )

    # --- QUERY EXECUTION ---
    def build_messages(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        history: Optional[List[BaseMessage]] = None,
    ) -> List[BaseMessage]:
        """
        Assemble the message list sent to the model: optional system prompt, prior
        conversation turns (oldest first), then the new user prompt.
        """
        messages = [SystemMessage(content=system_prompt)] if system_prompt else []
        messages.extend(history or [])
        messages.append(HumanMessage(content=user_prompt))
        return messages

    async def aquery(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        history: Optional[List[BaseMessage]] = None,
        temperature: Optional[float] = None,
        expect_json: bool = False,
        function_name: Optional[str] = None,
    ) -> str | dict:
        """
        Perform a model query with flexible configuration.

        Args:
            system_prompt (Optional[str]): Instruction or behavioral setup for the model.
            user_prompt (str): Input text or main query.
            history (Optional[List[BaseMessage]]): Earlier conversation turns to send before
                `user_prompt`. Not modified by this method.
            temperature (Optional[float]): Model creativity level (0.0–1.0). Defaults to
                APP_DEFAULTS.LLM_TEMPERATURE.
            expect_json (bool): Whether to parse response as JSON.
            function_name (Optional[str]): Overrides `self.function_name` for this call.

        Returns:
            str | dict: dict if `expect_json` is True otherwise str. str may be returned even
                when `expect_json` is True if the LLM does not behave as expected.

        Raises:
            LLMInitializationError: If `initialize_client()` has not been run.
            LLMQueryError: If the call fails, times out or returns nothing.
        """
        if not self.client and not self.test_mode:
            raise LLMInitializationError(provider=self.provider, model=self.model)

        function_name = function_name or self.function_name
        messages = self.build_messages(system_prompt, user_prompt, history)
        if temperature is None:
            temperature = APP_DEFAULTS.LLM_TEMPERATURE

        try:
            if self.test_mode == False:
                # Query the LLM
                response: AIMessage = await asyncio.wait_for(
                    self.client.ainvoke(messages, temperature=temperature),
                    timeout=self.timeout_seconds,
                )

            elif function_name and self.test_response_type:
                # Return a mock LLM response (for testing)
                response: AIMessage = create_mock_llm_response(
                    function_name=function_name,
                    response_type=self.test_response_type,
                    provider=self.provider
                )
            else:
                raise LLMQueryError(
                    provider=self.provider,
                    model=self.model,
                    additional_message= (
                        "Test mode is enabled without valid test variables having been defined. "
                        f"self.test_mode = {self.test_mode} "
                        f"function_name = {function_name} "
                    ),
                )

            if not response or not response.content:
                raise LLMEmptyResponse(provider=self.provider, model=self.model)

            response_content = self._message_text(response).strip()

            if expect_json:
                try:
                    response_content = self._clean_llm_json_response(response_text=response_content)
                except Exception as e:
                    # Warn the user if we're expecting a json response but didn't get one (LLM faliure)
                    warnings.warn(
                        (
                            f"LLM did not return valid JSON when it was expected to. "
                            f"Provider: `{self.provider}` "
                            f"Model: `{self.model}` "
                            f"Function: `{function_name}` \n"
                            f"Exception: `{e}` \n"
                            "This may occur if the LLM output was malformed or test mode variables "
                            "were not correctly defined."
                        ),
                        category=UserWarning,
                    )

            if not response_content and self.fallback_message:
                response_content = self.fallback_message

            return response_content

        except asyncio.TimeoutError as e:
            raise LLMQueryError(
                provider=self.provider,
                model=self.model,
                additional_message=f"No reply within {self.timeout_seconds} seconds",
                original_exception=e,
            )
        except Exception as e:
            raise LLMQueryError(provider=self.provider, model=self.model, original_exception=e)

    @staticmethod
    def _message_text(response: AIMessage) -> str:
        """
        Return the text of an AIMessage. Anthropic replies may carry a list of content
        blocks instead of a plain string; only the text blocks are kept.
        """
        content = response.content
        if isinstance(content, str):
            return content
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)

    def _clean_llm_json_response(self, response_text: str):
        """
        Normalize and parse a JSON string returned by an LLM into a valid Python object.

        Handles the common formatting issues that occur when LLMs return JSON-like data
        wrapped in Markdown code fences, extra whitespace, or stray characters.

        The function performs the following steps:
        1. Removes leading and trailing whitespace.
        2. Strips Markdown-style code fences such as ```json ... ``` or ``` ... ```.
        3. Attempts to directly parse the cleaned string as JSON.
        4. If direct parsing fails, uses a regex search to extract the first valid JSON
            object (`{...}`) or array (`[...]`) from the text and parses that.
        5. Raises a `json.JSONDecodeError` if no valid JSON structure can be found.

        Args:
            response_text (str): The raw text response from an LLM that is expected to
                                contain valid JSON data.

        Returns:
            Any: The parsed Python object (typically a `dict` or `list`).

        Raises:
            json.JSONDecodeError: If no valid JSON structure can be extracted or parsed
                                from the provided text.
        """
        text = response_text.strip()

        # Matches ```json ... ``` or ``` ... ``` anywhere in the string
        text = re.sub(r"^```[a-zA-Z]*\n?", "", text)
        text = re.sub(r"\n?```$", "", text)

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            # If it still fails, try to extract the JSON content by searching for '{}' or '[]'
            match = re.search(r"(\{.*\}|\[.*\])", text, re.DOTALL)
            if match:
                return json.loads(match.group(1))
            raise  # rethrow if no valid JSON structure was found
