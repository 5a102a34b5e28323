"""conftest_helpers.py
Helper functions for `tests/conftest.py`
"""

from career_studio.ai_gateway.llm.llm_client import LLMClient


# --------------------------------------------------------------
# SETUP MONKEYPATCH FIXTURES
# --------------------------------------------------------------
def apply_mock_llm_patch(monkeypatch):
    """
    Core patching logic for LLMClient.

    Forces every LLMClient built during the test to use mock LLM responses:
      - `test_mode=True`, so no API key is required and no provider client is built
      - `test_response_type="success"` unless the caller chose another type

    Replies come from `career_studio.test_helpers.llm_client_test_helpers`,
    selected by the gateway operation name (`generate_summary`,
    `enhance_bullet`, `analyze_match`, `interview_turn`).

    Notes:
      - Intended to be called from a fixture to control scope.
      - Does not yield; directly applies the monkeypatch.
    """
    original_init = LLMClient.__init__

    def patched_init(self, *args, **kwargs):
        kwargs.setdefault("test_mode", True)
        kwargs.setdefault("test_response_type", "success")
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(LLMClient, "__init__", patched_init)
