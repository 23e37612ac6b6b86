import os
import threading
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from restaurant_agent.agent.loop import AgentLoop, TurnResult
from restaurant_agent.config import Settings, settings
from restaurant_agent.main import build_agent, main, run_repl
from restaurant_agent.observability.tracing import setup_observability


def feed(*lines):
    """input() double that ends with EOF once lines run out."""
    queue = list(lines)
    
    def _input(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)
    return _input


@pytest.fixture
def agent():
    agent = MagicMock(spec=AgentLoop)
    agent.run_turn = AsyncMock(return_value=TurnResult(output="We have Steak.", cycles=2))
    return agent


class TestRepl:
    """Tests for the interactive loop"""
    
    @pytest.mark.asyncio
    async def test_exit(self, agent):
        printed = []
        code = await run_repl(agent, feed("EXIT"), lambda *a: printed.append(" ".join(a)))
        
        assert code == 0
        agent.run_turn.assert_not_awaited()
        assert printed[-1].endswith("Goodbye!")
    
    @pytest.mark.asyncio
    async def test_answer_printed(self, agent):
        printed = []
        code = await run_repl(agent, feed("What is on the menu?", "exit"), lambda *a: printed.append(" ".join(a)))
        
        assert code == 0
        agent.run_turn.assert_awaited_once_with("What is on the menu?")
        assert "\nResponse: We have Steak." in printed
    
    @pytest.mark.asyncio
    async def test_error_printed(self, agent):
        agent.run_turn.return_value = TurnResult(error="Invalid JSON response from LLM", cycles=1)
        printed = []
        
        await run_repl(agent, feed("hi"), lambda *a: printed.append(" ".join(a)))
        
        assert "Error: Invalid JSON response from LLM" in printed
    
    @pytest.mark.asyncio
    async def test_input_read_off_event_loop_thread(self, agent):
        loop_thread = threading.get_ident()
        reader_threads = []
        
        def _input(prompt):
            reader_threads.append(threading.get_ident())
            return "exit"
        
        await run_repl(agent, _input, lambda *a: None)
        
        assert reader_threads and reader_threads[0] != loop_thread
    
    @pytest.mark.asyncio
    async def test_blank_lines_skipped_and_eof_exits(self, agent):
        code = await run_repl(agent, feed("", "   "), lambda *a: None)
        
        assert code == 0
        agent.run_turn.assert_not_awaited()


class TestMain:
    """Tests for process start-up"""
    
    def test_missing_api_key(self, capsys):
        with patch.object(settings, "openai_api_key", None):
            assert main([]) == 1
        assert "OPENAI_API_KEY" in capsys.readouterr().err
    
    def test_invalid_cycle_limit(self):
        with patch.object(settings, "openai_api_key", "sk-test"):
            assert main(["--max-cycles", "0"]) == 2
    
    def test_build_agent(self, tmp_path):
        llm = MagicMock()
        agent = build_agent(tmp_path / "orders", max_cycles=4, llm_client=llm)
        
        assert (tmp_path / "orders").is_dir()
        assert agent.max_cycles == 4
        assert "createOrder" in agent.registry
        assert agent.session.messages[0].role == "system"


class TestSettings:
    """Tests for configuration defaults"""
    
    def test_defaults(self, monkeypatch):
        for name in ("OPENAI_MODEL", "MAX_CYCLES_PER_TURN", "ORDERS_DIR"):
            monkeypatch.delenv(name, raising=False)
        config = Settings(_env_file=None)
        
        assert config.openai_model == "gpt-4o"
        assert config.max_cycles_per_turn == 10
        assert str(config.orders_dir) == "orders"
    
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MAX_CYCLES_PER_TURN", "3")
        assert Settings(_env_file=None).max_cycles_per_turn == 3
    
    def test_cycle_limit_validated(self, monkeypatch):
        monkeypatch.setenv("MAX_CYCLES_PER_TURN", "0")
        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestObservability:
    """Tests for LangSmith setup"""
    
    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setenv("LANGCHAIN_PROJECT", "untouched")
        with patch.object(settings, "langchain_tracing_v2", False):
            assert setup_observability() is False
        
        assert os.environ["LANGCHAIN_PROJECT"] == "untouched"
    
    def test_exports_environment(self, monkeypatch):
        monkeypatch.setenv("LANGCHAIN_TRACING_V2", "false")
        monkeypatch.setenv("LANGCHAIN_PROJECT", "placeholder")
        with patch.object(settings, "langchain_tracing_v2", True), \
                patch.object(settings, "langchain_api_key", None):
            assert setup_observability() is True
        
        assert os.environ["LANGCHAIN_TRACING_V2"] == "true"
        assert os.environ["LANGCHAIN_PROJECT"] == settings.langchain_project
