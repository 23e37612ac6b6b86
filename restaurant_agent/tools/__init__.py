from restaurant_agent.tools.registry import (
    ToolArgumentError,
    ToolExecutionError,
    ToolParameter,
    ToolRegistry,
    ToolSpec,
    build_default_registry,
)

__all__ = [
    "ToolArgumentError",
    "ToolExecutionError",
    "ToolParameter",
    "ToolRegistry",
    "ToolSpec",
    "build_default_registry",
]
