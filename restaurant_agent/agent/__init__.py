from restaurant_agent.agent.loop import AgentLoop, LoopState, TurnResult
from restaurant_agent.agent.protocol import ProtocolError, parse_assistant_message
from restaurant_agent.agent.session import ConversationSession

__all__ = [
    "AgentLoop",
    "ConversationSession",
    "LoopState",
    "ProtocolError",
    "TurnResult",
    "parse_assistant_message",
]
