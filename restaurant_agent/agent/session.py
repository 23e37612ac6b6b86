"""Append-only conversation history owned by the agent loop."""
from typing import Any, Dict, List, Optional, Tuple

from restaurant_agent.agent.protocol import dump_payload
from restaurant_agent.models.domain import ChatMessage, ObservationMessage, UserMessage


class ConversationSession:
    """Single linear history; entries are frozen and only ever appended."""
    
    def __init__(self, system_prompt: Optional[str] = None):
        self._messages: List[ChatMessage] = []
        if system_prompt:
            self._append("system", system_prompt)
    
    def __len__(self) -> int:
        return len(self._messages)
    
    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)
    
    def _append(self, role: str, content: str) -> ChatMessage:
        message = ChatMessage(role=role, content=content)
        self._messages.append(message)
        return message
    
    def add_user(self, text: str) -> ChatMessage:
        return self._append("user", dump_payload(UserMessage(user=text)))
    
    def add_assistant(self, raw: str) -> ChatMessage:
        """Record a model reply exactly as received."""
        return self._append("assistant", raw)
    
    def add_observation(self, payload: Any) -> ChatMessage:
        return self._append("user", dump_payload(ObservationMessage(observation=payload)))
    
    def to_openai(self) -> List[Dict[str, str]]:
        return [message.model_dump() for message in self._messages]
