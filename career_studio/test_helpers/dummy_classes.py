"""dummy_classes.py
Holds dummy classes to test with
"""
import asyncio
from typing import List, Optional

from career_studio.exceptions import LLMQueryError
from career_studio.ai_gateway.llm.llm_client import LLMClient


class DummyLLMClient(LLMClient):
    """
    LLMClient subclass for testing that never touches the environment or network.

    Replies are served in order from `replies`. An Exception instance in the list
    is raised instead of returned. If `gate` is set, every call waits on it before
    replying, which lets tests hold a call "in flight".

    Attributes:
        calls (List[dict]): Keyword arguments of every aquery() call, in order.
    """
    def __init__(
        self,
        replies: Optional[List[object]] = None,
        gate: Optional[asyncio.Event] = None,
        model: str = "dummy-model",
    ):
        self.provider = "anthropic"
        self.model = model
        self.api_key = "dummy-key"
        self.function_name = None
        self.fallback_message = None
        self.timeout_seconds = 1.0
        self.test_mode = False
        self.test_response_type = "success"
        self.client = object()

        self.replies = list(replies or [])
        self.gate = gate
        self.calls: List[dict] = []

    def initialize_client(self) -> None:
        return None

    async def aquery(self, system_prompt, user_prompt, history=None, temperature=None,
                     expect_json=False, function_name=None):
        # Copy history; the caller may extend it after we return
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "history": list(history or []),
            "expect_json": expect_json,
            "function_name": function_name,
        })
        if self.gate is not None:
            await self.gate.wait()

        if not self.replies:
            raise LLMQueryError(provider=self.provider, model=self.model,
                                additional_message="DummyLLMClient ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply
