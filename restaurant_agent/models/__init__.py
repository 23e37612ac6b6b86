"""Export domain models."""
from restaurant_agent.models.domain import (
    ActionMessage,
    AssistantMessage,
    ChatMessage,
    MessageType,
    ObservationMessage,
    Order,
    OrderStatus,
    OutputMessage,
    PlanMessage,
    UserMessage,
)

__all__ = [
    "ActionMessage",
    "AssistantMessage",
    "ChatMessage",
    "MessageType",
    "ObservationMessage",
    "Order",
    "OrderStatus",
    "OutputMessage",
    "PlanMessage",
    "UserMessage",
]
