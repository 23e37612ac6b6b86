"""OpenAI chat completion client constrained to JSON-object output."""
import logging
from typing import Any, Dict, List, Optional

from langsmith import traceable
from openai import AsyncOpenAI, OpenAIError

from restaurant_agent.config import settings

logger = logging.getLogger(__name__)


class LLMRequestError(RuntimeError):
    """Raised when the completion service fails or returns no content."""


class LLMClient:
    """AsyncOpenAI wrapper with LangSmith tracing."""
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize OpenAI client.
        
        Args:
            api_key: Overrides settings.openai_api_key
            model: Overrides settings.openai_model
            temperature: Overrides settings.openai_temperature
            client: Preconfigured AsyncOpenAI instance
        """
        self.model = model or settings.openai_model
        self.temperature = temperature if temperature is not None else settings.openai_temperature
        self.client = client or AsyncOpenAI(api_key=api_key or settings.openai_api_key)
    
    @traceable(name="llm_chat_completion")
    async def complete_json(self, messages: List[Dict[str, str]]) -> str:
        """
        Send the conversation and return the raw JSON-object reply.
        
        Args:
            messages: Role-tagged messages, system prompt included
            
        Returns:
            Message content as returned by the model (not parsed)
        """
        request_params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
        }
        if self.temperature is not None:
            request_params["temperature"] = self.temperature
        
        logger.debug(f"LLM: request with {len(messages)} messages")
        try:
            response = await self.client.chat.completions.create(**request_params)
        except OpenAIError as e:
            logger.error(f"LLM: request failed: {str(e)}", exc_info=True)
            raise LLMRequestError(f"LLM request failed: {e}") from e
        
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMRequestError("Empty response from LLM")
        
        logger.debug(f"LLM: raw response: {content}")
        return content
