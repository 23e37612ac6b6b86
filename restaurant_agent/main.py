"""Command-line entry point for the restaurant assistant."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from restaurant_agent.actions.order_repository import OrderRepository
from restaurant_agent.actions.order_service import OrderService
from restaurant_agent.agent.loop import AgentLoop
from restaurant_agent.catalog.menu import Catalog
from restaurant_agent.config import settings
from restaurant_agent.llm.client import LLMClient
from restaurant_agent.observability.tracing import setup_observability
from restaurant_agent.tools.registry import build_default_registry

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"
SEPARATOR = "---------------------------------------------"


def configure_logging(level: str) -> None:
    """Log to stderr so the conversation on stdout stays readable."""
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    # Library chatter is only useful when debugging requests
    for noisy in ("httpx", "openai", "langsmith"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def build_agent(
    orders_dir: Path,
    model: Optional[str] = None,
    max_cycles: Optional[int] = None,
    llm_client: Optional[LLMClient] = None,
) -> AgentLoop:
    """Wire catalog, order store, tools and completion client into a loop."""
    catalog = Catalog()
    order_service = OrderService(OrderRepository(orders_dir), catalog)
    registry = build_default_registry(catalog, order_service)
    return AgentLoop(
        llm_client=llm_client or LLMClient(model=model),
        registry=registry,
        max_cycles=max_cycles,
    )


async def run_repl(
    agent: AgentLoop,
    input_func: Callable[[str], str] = input,
    output: Callable[..., None] = print,
) -> int:
    """
    Read one line per prompt until ``exit`` or end of input.
    
    Returns:
        Process exit code
    """
    output(f"Welcome to the {settings.app_name}!")
    output(f"Type '{EXIT_COMMAND}' to quit the program.")
    output(SEPARATOR)
    
    while True:
        try:
            query = await asyncio.to_thread(input_func, ">> ")
        except (EOFError, KeyboardInterrupt):
            output()
            break
        
        if query.strip().lower() == EXIT_COMMAND:
            break
        if not query.strip():
            continue
        
        result = await agent.run_turn(query)
        if result.ok:
            output(f"\nResponse: {result.output}")
        else:
            output(f"Error: {result.error}")
        output(SEPARATOR)
    
    output(f"Thank you for using the {settings.app_name}. Goodbye!")
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="restaurant-agent",
        description="Restaurant management assistant backed by an LLM",
    )
    parser.add_argument("--model", default=None, help="Override model (otherwise uses OPENAI_MODEL)")
    parser.add_argument(
        "--orders-dir",
        type=Path,
        default=None,
        help="Directory for order files (otherwise uses ORDERS_DIR)",
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Maximum model calls per user message (otherwise uses MAX_CYCLES_PER_TURN)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (otherwise uses LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level or settings.log_level)
    
    if not settings.openai_api_key:
        print("Error: OPENAI_API_KEY is not set in .env file", file=sys.stderr)
        return 1
    if args.max_cycles is not None and args.max_cycles < 1:
        print("Error: --max-cycles must be at least 1", file=sys.stderr)
        return 2
    
    if setup_observability():
        logger.info(f"LangSmith tracing enabled for project {settings.langchain_project}")
    agent = build_agent(
        orders_dir=args.orders_dir or settings.orders_dir,
        model=args.model,
        max_cycles=args.max_cycles,
    )
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    try:
        return asyncio.run(run_repl(agent))
    except KeyboardInterrupt:
        logger.info("Session interrupted by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
