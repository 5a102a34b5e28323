"""conversation.py
Multi-turn chat context handed out by AIGateway.start_interview().
"""
from typing import List

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from career_studio.exceptions import AIServiceError, LLMEmptyResponse, LLMError
from career_studio.ai_gateway.llm.llm_client import LLMClient


class ConversationHandle:
    """
    Holds the persona and accumulated message history of one interview chat.

    History is only extended once a turn succeeds, so a failed or cancelled
    turn leaves the context exactly as it was before the call.

    Attributes:
        system_prompt (str): Persona instruction sent with every turn.
        history (List[BaseMessage]): Completed turns, oldest first.
    """
    OPERATION = "interview_turn"

    def __init__(self, llm_client: LLMClient, system_prompt: str):
        self.llm_client = llm_client
        self.system_prompt = system_prompt
        self.history: List[BaseMessage] = []

    async def send_message(self, text: str) -> str:
        """
        Send one user turn and return the assistant's reply text (may be empty).

        Raises:
            AIServiceError: If the AI service call fails or times out.
        """
        try:
            reply = await self.llm_client.aquery(
                system_prompt=self.system_prompt,
                user_prompt=text,
                history=self.history,
                function_name=self.OPERATION,
            )
        except LLMError as e:
            if not isinstance(e.original_exception, LLMEmptyResponse):
                raise AIServiceError(operation=self.OPERATION, original_exception=e)
            reply = ""

        reply = reply if isinstance(reply, str) else str(reply)
        self.history.extend([HumanMessage(content=text), AIMessage(content=reply)])
        return reply

    @property
    def turn_count(self) -> int:
        return len(self.history) // 2
