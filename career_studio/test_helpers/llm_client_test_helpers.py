"""llm_client_test_helpers.py
Canned LLM replies used by LLMClient when running in test mode.
"""

from typing import Literal
import json
import random
import uuid

from langchain_core.messages import AIMessage

GatewayFunctionName = Literal["generate_summary", "enhance_bullet", "analyze_match", "interview_turn"]

expected_test_responses = {
    "generate_summary": {
        "success": (
            "Results-driven software engineer with six years of experience building "
            "scalable web platforms in React and TypeScript. Led migrations that cut page "
            "load times by 40% and mentored a team of four engineers."
        ),
        "failed": "I cannot write a summary without more information.",
        "unexpected_json": {"summary": "Experienced engineer."},
        "not_json": "Experienced engineer.",
        "empty": "",
    },
    "enhance_bullet": {
        "success": (
            "Spearheaded the redesign of the checkout flow, increasing conversion by 15% "
            "across 2M monthly sessions."
        ),
        "failed": "Please provide a bullet point to rewrite.",
        "unexpected_json": {"bullet": "Improved checkout."},
        "not_json": "Improved checkout.",
        "empty": "",
    },
    "analyze_match": {
        "success": {
            "score": 82,
            "missingKeywords": ["Kubernetes"],
            "suggestions": ["Add metrics"],
            "summary": "Good fit",
        },
        "failed": {
            "score": 0,
            "missingKeywords": [],
            "suggestions": [],
            "summary": "No job description was provided.",
        },
        "unexpected_json": {"compatibility": "high", "notes": "Strong candidate"},
        "not_json": "The candidate looks like a good fit for this role.",
        "empty": "",
    },
    "interview_turn": {
        "success": (
            "Thanks for joining. To start, can you walk me through a project where you "
            "owned a feature end to end?"
        ),
        "failed": "Sorry, I lost track of the conversation.",
        "unexpected_json": {"question": "Tell me about yourself."},
        "not_json": "Tell me about yourself.",
        "empty": "",
    },
}

def create_mock_llm_response(
    function_name: GatewayFunctionName,
    provider: Literal["anthropic"],
    response_type: Literal["success", "failed", "unexpected_json", "not_json", "empty"] = "success"
) -> AIMessage:
    """
    Create a simulated AIMessage to mimic LLM responses with realistic structure per provider.
    """
    try:
        content_value = expected_test_responses[function_name][response_type]
    except KeyError:
        content_value = "Generic response"

    # Convert dict responses to JSON string; leave strings as-is
    content = json.dumps(content_value) if isinstance(content_value, dict) else content_value

    # --- token counts ---
    input_tokens = random.randint(50, 150)
    output_tokens = random.randint(20, 100)
    total_tokens = input_tokens + output_tokens

    # --- build response metadata depending on provider ---
    if provider == "anthropic":
        response_metadata = {
            "id": str(uuid.uuid4()),
            "model": "claude-haiku-4-5",
            "stop_reason": "end_turn",
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": total_tokens
            }
        }
    else:
        raise ValueError(f"Unknown llm provider: {provider}")

    return AIMessage(
        content=content,
        additional_kwargs={},
        response_metadata=response_metadata,
        id=str(uuid.uuid4()),
        usage_metadata={
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": total_tokens
        }
    )
