"""LangSmith observability and tracing."""
import logging
import os

from restaurant_agent.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> bool:
    """
    Export LangSmith environment variables used by @traceable.
    
    Returns:
        Whether tracing was switched on
    """
    if not settings.langchain_tracing_v2:
        return False
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    if settings.langchain_api_key:
        os.environ["LANGCHAIN_API_KEY"] = settings.langchain_api_key
    else:
        logger.warning("LANGCHAIN_TRACING_V2 is set but LANGCHAIN_API_KEY is missing")
    os.environ["LANGCHAIN_PROJECT"] = settings.langchain_project
    return True
