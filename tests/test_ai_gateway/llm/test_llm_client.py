"""test_llm_client.py
Test LLMClient class.
"""
import asyncio
import os
import json
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from career_studio.ai_gateway.llm.llm_client import (
    LLMClient,
    LLMConfigError,
    LLMInitializationError,
    LLMQueryError,
)
from career_studio.config import APP_DEFAULTS

# -----------------------------
# Fake key for tests that only need configuration to resolve
# -----------------------------
@pytest.fixture
def fake_anthropic_key(monkeypatch):
    """Set a placeholder Anthropic key; no live calls are made with it."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test-key")
    return "sk-test-key"

# -----------------------------
# Skip if Anthropic key missing
# -----------------------------
@pytest.fixture
def has_anthropic_key():
    """Skip tests if Anthropic API key is missing or placeholder."""
    key = os.getenv("ANTHROPIC_API_KEY")
    if not key or key == "<REPLACE_ME>":
        pytest.skip("Anthropic API key not defined in .env")
    return key

# -----------------------------
# Initialization tests
# -----------------------------
def test_invalid_provider_raises():
    """Ensure initializing LLMClient with unsupported provider raises LLMConfigError."""
    with pytest.raises(LLMConfigError):
        LLMClient(provider="unsupported")


def test_model_resolution_defaults(fake_anthropic_key):
    """Check that model defaults to APP_DEFAULTS if not provided."""
    client = LLMClient(provider="anthropic", model=None)
    assert client.model == APP_DEFAULTS.ANTHROPIC_MODEL_ID


def test_missing_api_key_raises(NO_API_KEY):
    """Check that missing API key raises LLMConfigError."""
    with pytest.raises(LLMConfigError) as e:
        LLMClient(provider="anthropic")
    assert e.value.variable_name == "anthropic_API_KEY"


def test_placeholder_api_key_raises(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "<REPLACE_ME>")
    with pytest.raises(LLMConfigError):
        LLMClient(provider="anthropic")


def test_missing_api_key_tolerated_in_test_mode(NO_API_KEY):
    """Test mode never calls the provider, so it does not need a key."""
    client = LLMClient(provider="anthropic", test_mode=True)
    assert client.api_key is None


# -----------------------------
# Client initialization
# -----------------------------
@patch("langchain_anthropic.ChatAnthropic")
def test_initialize_client_anthropic(mock_chatanthropic, fake_anthropic_key):
    """Verify Anthropic client initializes correctly with API key and model."""
    client = LLMClient(provider="anthropic", model="test-model")
    client.initialize_client()
    mock_chatanthropic.assert_called_once()
    assert mock_chatanthropic.call_args.kwargs["model"] == "test-model"
    assert client.client is not None


@patch("langchain_anthropic.ChatAnthropic", side_effect=RuntimeError("boom"))
def test_initialize_client_failure_wrapped(mock_chatanthropic, fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    with pytest.raises(LLMInitializationError):
        client.initialize_client()


def test_initialize_client_skipped_in_test_mode(NO_API_KEY):
    client = LLMClient(provider="anthropic", test_mode=True)
    client.initialize_client()
    assert client.client is None


# -----------------------------
# Message assembly
# -----------------------------
def test_build_messages_orders_system_history_user(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    history = [HumanMessage(content="Hi"), AIMessage(content="Hello, first question?")]

    messages = client.build_messages("persona", "my answer", history)

    assert isinstance(messages[0], SystemMessage)
    assert messages[1:3] == history
    assert isinstance(messages[-1], HumanMessage)
    assert messages[-1].content == "my answer"
    # Caller's history must not be mutated
    assert len(history) == 2


def test_build_messages_without_system_prompt(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    messages = client.build_messages(None, "hello")
    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)


# -----------------------------
# Query tests
# -----------------------------
@pytest.mark.asyncio
async def test_query_without_client_raises(fake_anthropic_key):
    """Query without initializing client should raise LLMInitializationError."""
    client = LLMClient(provider="anthropic", model="test-model")
    with pytest.raises(LLMInitializationError):
        await client.aquery(system_prompt="Hi", user_prompt="Hello")


@pytest.mark.asyncio
async def test_query_returns_stripped_text(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(return_value=AIMessage(content="  A strong summary.  "))

    result = await client.aquery(system_prompt="sys", user_prompt="user")

    assert result == "A strong summary."
    client.client.ainvoke.assert_awaited_once()


@pytest.mark.asyncio
async def test_query_joins_content_blocks(fake_anthropic_key):
    """Anthropic replies can arrive as a list of content blocks."""
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(return_value=AIMessage(content=[
        {"type": "text", "text": "Part one. "},
        {"type": "text", "text": "Part two."},
    ]))

    result = await client.aquery(system_prompt=None, user_prompt="user")
    assert result == "Part one. Part two."


@pytest.mark.asyncio
async def test_query_parses_json(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(return_value=AIMessage(content='```json\n{"score": 50}\n```'))

    result = await client.aquery(system_prompt=None, user_prompt="user", expect_json=True)
    assert result == {"score": 50}


@pytest.mark.asyncio
async def test_query_invalid_json_warns_and_returns_text(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(return_value=AIMessage(content="not json at all"))

    with pytest.warns(UserWarning):
        result = await client.aquery(system_prompt=None, user_prompt="user", expect_json=True)
    assert result == "not json at all"


@pytest.mark.asyncio
async def test_query_provider_error_wrapped(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(side_effect=ConnectionError("network down"))

    with pytest.raises(LLMQueryError) as e:
        await client.aquery(system_prompt=None, user_prompt="user")
    assert "network down" in str(e.value)


@pytest.mark.asyncio
async def test_query_empty_response_raises(fake_anthropic_key):
    client = LLMClient(provider="anthropic", model="test-model")
    client.client = MagicMock()
    client.client.ainvoke = AsyncMock(return_value=AIMessage(content=""))

    with pytest.raises(LLMQueryError) as e:
        await client.aquery(system_prompt=None, user_prompt="user")
    assert "empty response" in str(e.value)


@pytest.mark.asyncio
async def test_query_times_out(fake_anthropic_key):
    """A hung provider call must end in LLMQueryError rather than wait forever."""
    client = LLMClient(provider="anthropic", model="test-model", timeout_seconds=0.05)

    async def hang(*args, **kwargs):
        await asyncio.sleep(10)

    client.client = MagicMock()
    client.client.ainvoke = hang

    with pytest.raises(LLMQueryError) as e:
        await client.aquery(system_prompt=None, user_prompt="user")
    assert "No reply within" in str(e.value)


@pytest.mark.asyncio
async def test_query_test_mode_returns_mock(NO_API_KEY):
    """Verify test_mode returns deterministic mock response using create_mock_llm_response."""
    client = LLMClient(
        provider="anthropic",
        model="test-model",
        test_mode=True,
        function_name="analyze_match",
        test_response_type="success",
    )
    result = await client.aquery(system_prompt="sys", user_prompt="user", expect_json=True)
    assert result["score"] == 82
    assert result["missingKeywords"] == ["Kubernetes"]


@pytest.mark.asyncio
async def test_query_test_mode_function_name_override(NO_API_KEY):
    client = LLMClient(provider="anthropic", test_mode=True, function_name="analyze_match")
    result = await client.aquery(system_prompt=None, user_prompt="user", function_name="enhance_bullet")
    assert isinstance(result, str)
    assert "Spearheaded" in result


@pytest.mark.asyncio
async def test_query_test_mode_without_function_name_raises(NO_API_KEY):
    client = LLMClient(provider="anthropic", test_mode=True)
    with pytest.raises(LLMQueryError):
        await client.aquery(system_prompt=None, user_prompt="user")


@pytest.mark.asyncio
async def test_query_test_mode_empty_response_raises(NO_API_KEY):
    client = LLMClient(
        provider="anthropic",
        test_mode=True,
        function_name="generate_summary",
        test_response_type="empty",
    )
    with pytest.raises(LLMQueryError):
        await client.aquery(system_prompt=None, user_prompt="user")


# -----------------------------
# _clean_llm_json_response tests
# -----------------------------
@pytest.mark.parametrize("raw,expected", [
    ('{"a":1}', {"a": 1}),
    ('```json\n{"b":2}```', {"b": 2}),
    ('Some text {"c":3} more text', {"c": 3}),
    ('[1,2,3]', [1,2,3])
])
def test_clean_llm_json_response_valid(raw, expected, fake_anthropic_key):
    """Verify _clean_llm_json_response parses valid JSON and fenced JSON correctly."""
    client = LLMClient(provider="anthropic", model="test-model")
    result = client._clean_llm_json_response(raw)
    assert result == expected


def test_clean_llm_json_response_invalid(fake_anthropic_key):
    """Ensure invalid JSON raises JSONDecodeError."""
    client = LLMClient(provider="anthropic", model="test-model")
    with pytest.raises(json.JSONDecodeError):
        client._clean_llm_json_response("invalid json string")


# -----------------------------
# Live query (only with --llm-mode=basic_only or full)
# -----------------------------
@pytest.mark.asyncio
async def test_live_query(has_anthropic_key, LLM_TEST_MODE):
    if LLM_TEST_MODE == "mock_only":
        pytest.skip("Live LLM calls disabled (run with --llm-mode=basic_only)")
    client = LLMClient(provider="anthropic")
    client.initialize_client()
    result = await client.aquery(system_prompt=None, user_prompt="Reply with the word: pong")
    assert isinstance(result, str)
    assert result
