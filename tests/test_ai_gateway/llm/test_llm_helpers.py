"""test_llm_helpers.py
Test files in llm_helpers.py
"""

import pytest
from unittest.mock import MagicMock, patch

from career_studio.exceptions import LLMConfigError
from career_studio.ai_gateway.llm.llm_helpers import initialize_llm_if_needed
from career_studio.ai_gateway.llm.llm_client import LLMClient


def test_existing_llm_client_returned():
    client = MagicMock(spec=LLMClient)
    # Should return the same client if provided
    result = initialize_llm_if_needed(llm_client=client)
    assert result is client
    client.initialize_client.assert_not_called()

def test_existing_llm_client_wrong_type_raises():
    with pytest.raises(TypeError):
        initialize_llm_if_needed(llm_client="not-a-client")

def test_missing_api_key_returns_none(NO_API_KEY):
    assert initialize_llm_if_needed() is None

def test_other_config_errors_propagate():
    with patch(
        "career_studio.ai_gateway.llm.llm_helpers.LLMClient",
        side_effect=LLMConfigError(variable_name="LLM_PROVIDER"),
    ):
        with pytest.raises(LLMConfigError):
            initialize_llm_if_needed()

@patch("career_studio.ai_gateway.llm.llm_helpers.LLMClient")
def test_llm_initialized_when_needed(mock_llm_class):
    mock_instance = MagicMock(spec=LLMClient)
    mock_llm_class.return_value = mock_instance

    result = initialize_llm_if_needed(model="claude-test", function_name="analyze_match")

    mock_llm_class.assert_called_once_with(model="claude-test", function_name="analyze_match")
    mock_instance.initialize_client.assert_called_once()
    assert result is mock_instance

def test_test_mode_client_built_without_key(NO_API_KEY, FORCE_MOCK_LLM_RESPONSES):
    client = initialize_llm_if_needed()
    assert isinstance(client, LLMClient)
    assert client.test_mode is True
