"""Strict parsing of model replies into protocol messages."""
import json
from decimal import Decimal
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from restaurant_agent.models.domain import (
    ActionMessage,
    AssistantMessage,
    OutputMessage,
    PlanMessage,
)

_assistant_adapter = TypeAdapter(AssistantMessage)


class ProtocolError(ValueError):
    """Raised when a model reply is not a valid plan, action or output message."""


def parse_assistant_message(raw: str) -> Union[PlanMessage, ActionMessage, OutputMessage]:
    """
    Parse one model reply.
    
    Args:
        raw: Message content returned by the completion service
        
    Returns:
        The validated message variant
        
    Raises:
        ProtocolError: On invalid JSON, a non-object, or an unknown/missing type
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ProtocolError(f"Invalid JSON response from LLM: {e}") from e
    
    if not isinstance(data, dict):
        raise ProtocolError("LLM response is not a JSON object")
    if "type" not in data:
        raise ProtocolError("LLM response has no 'type' field")
    
    try:
        return _assistant_adapter.validate_python(data)
    except ValidationError as e:
        raise ProtocolError(f"Invalid {data.get('type')!r} message: {e.errors()[0]['msg']}") from e


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


def dump_payload(message: Any) -> str:
    """Serialize a protocol message for the conversation history."""
    return json.dumps(message.model_dump(mode="python"), default=_to_jsonable)
