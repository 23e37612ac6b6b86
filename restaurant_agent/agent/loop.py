"""Turn-based orchestration of model replies and tool calls."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from langsmith import traceable

from restaurant_agent.agent.prompts import build_system_prompt
from restaurant_agent.agent.protocol import ProtocolError, parse_assistant_message
from restaurant_agent.agent.session import ConversationSession
from restaurant_agent.config import settings
from restaurant_agent.llm.client import LLMClient, LLMRequestError
from restaurant_agent.models.domain import ActionMessage, OutputMessage, PlanMessage
from restaurant_agent.tools.registry import ToolExecutionError, ToolRegistry

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    """Where the loop is within a turn."""
    AWAITING_USER_INPUT = "AWAITING_USER_INPUT"
    AWAITING_MODEL_RESPONSE = "AWAITING_MODEL_RESPONSE"
    DISPATCHING = "DISPATCHING"
    DONE = "DONE"


@dataclass
class TurnResult:
    """Outcome of one user turn: a final answer or an error, never both."""
    output: Optional[str] = None
    error: Optional[str] = None
    cycles: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


class AgentLoop:
    """
    Drives one conversation with the completion service.

    Each model call is one cycle. A plan is recorded and the model is asked
    again; an action is dispatched and its observation recorded; an output
    ends the turn. A turn that reaches ``max_cycles`` without an output gets
    a terminal error observation and ends with an error.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        registry: ToolRegistry,
        session: Optional[ConversationSession] = None,
        max_cycles: Optional[int] = None,
    ):
        self.llm_client = llm_client
        self.registry = registry
        self.session = session if session is not None else ConversationSession(
            build_system_prompt(registry)
        )
        self.max_cycles = max_cycles if max_cycles is not None else settings.max_cycles_per_turn
        if self.max_cycles < 1:
            raise ValueError("max_cycles must be at least 1")
        self.state = LoopState.AWAITING_USER_INPUT

    @traceable(name="agent_turn")
    async def run_turn(self, user_input: str) -> TurnResult:
        """
        Resolve one external input into a final answer.

        Protocol, completion service and tool failures end the turn with
        ``TurnResult.error`` set; the session stays usable for the next input.
        """
        self.session.add_user(user_input)
        cycles = 0
        try:
            while cycles < self.max_cycles:
                cycles += 1
                self.state = LoopState.AWAITING_MODEL_RESPONSE
                raw = await self.llm_client.complete_json(self.session.to_openai())
                self.session.add_assistant(raw)
                message = parse_assistant_message(raw)

                if isinstance(message, OutputMessage):
                    self.state = LoopState.DONE
                    logger.info(f"AGENT: output after {cycles} cycle(s)")
                    return TurnResult(output=message.output, cycles=cycles)

                if isinstance(message, PlanMessage):
                    logger.info(f"AGENT: plan - {message.plan}")
                    continue

                if isinstance(message, ActionMessage):
                    self.state = LoopState.DISPATCHING
                    logger.info(f"AGENT: action - {message.function}")
                    observation = self.registry.dispatch(message.function, message.input)
                    self.session.add_observation(observation)

            error = f"No final output after {self.max_cycles} model calls"
            logger.warning(f"AGENT: {error}")
            self.session.add_observation(f"Error: {error}. Stop and answer the user.")
            return TurnResult(error=error, cycles=cycles)

        except ProtocolError as e:
            logger.warning(f"AGENT: protocol error: {e}")
            return TurnResult(error=str(e), cycles=cycles)
        except LLMRequestError as e:
            return TurnResult(error=str(e), cycles=cycles)
        except ToolExecutionError as e:
            return TurnResult(error=str(e), cycles=cycles)
        finally:
            self.state = LoopState.AWAITING_USER_INPUT
