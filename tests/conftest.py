import os

# Keep LangSmith inert for @traceable during tests
os.environ["LANGCHAIN_TRACING_V2"] = "false"
os.environ["LANGSMITH_TRACING"] = "false"

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from restaurant_agent.actions.order_repository import OrderRepository
from restaurant_agent.actions.order_service import OrderService
from restaurant_agent.catalog.menu import Catalog
from restaurant_agent.llm.client import LLMClient
from restaurant_agent.tools.registry import build_default_registry


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def orders_dir(tmp_path):
    return tmp_path / "orders"


@pytest.fixture
def repository(orders_dir):
    return OrderRepository(orders_dir)


@pytest.fixture
def order_service(repository, catalog):
    return OrderService(repository, catalog)


@pytest.fixture
def registry(catalog, order_service):
    return build_default_registry(catalog, order_service)


def reply(**fields):
    """JSON text as the completion service would return it."""
    return json.dumps(fields)


@pytest.fixture
def scripted_llm():
    """LLM client double returning the given replies in order."""
    def _make(*replies):
        llm = MagicMock(spec=LLMClient)
        llm.complete_json = AsyncMock(side_effect=list(replies))
        return llm
    return _make
