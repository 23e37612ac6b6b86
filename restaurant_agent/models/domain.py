"""Pydantic domain models with strict validation."""
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Documented order statuses.

    The store accepts any status string; these are the values the
    assistant is told about.
    """
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"


class MessageType(str, Enum):
    """Protocol message type tags."""
    USER = "user"
    PLAN = "plan"
    ACTION = "action"
    OBSERVATION = "observation"
    OUTPUT = "output"


class Order(BaseModel):
    """Order record as persisted on disk (camelCase keys)."""
    order_id: str = Field(..., alias="orderId", description="Unique order identifier")
    customer_name: str = Field(..., alias="customerName", description="Customer name")
    items: List[str] = Field(default_factory=list, description="Catalog item names")
    total_price: float = Field(..., ge=0, alias="totalPrice", description="Sum of item prices")
    status: str = Field(OrderStatus.PENDING.value, description="Current order status")
    timestamp: datetime = Field(..., description="Creation timestamp")
    
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }
    
    def to_record(self) -> dict:
        """Return the JSON-ready record with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class UserMessage(BaseModel):
    """External input wrapped for the conversation."""
    type: Literal["user"] = "user"
    user: str


class PlanMessage(BaseModel):
    """Informational step announced by the model."""
    type: Literal["plan"]
    plan: str
    
    model_config = {"extra": "ignore"}


class ActionMessage(BaseModel):
    """Tool invocation requested by the model."""
    type: Literal["action"]
    function: str = Field(..., min_length=1)
    input: Any = None
    
    model_config = {"extra": "ignore"}


class ObservationMessage(BaseModel):
    """Tool result fed back to the model."""
    type: Literal["observation"] = "observation"
    observation: Any = None


class OutputMessage(BaseModel):
    """Final answer for the current turn."""
    type: Literal["output"]
    output: str
    
    model_config = {"extra": "ignore"}


# Only these variants may be produced by the model.
AssistantMessage = Annotated[
    Union[PlanMessage, ActionMessage, OutputMessage],
    Field(discriminator="type"),
]


class ChatMessage(BaseModel):
    """Role-tagged entry of the conversation history."""
    role: Literal["system", "user", "assistant"]
    content: str
    
    model_config = {"frozen": True, "extra": "forbid"}
