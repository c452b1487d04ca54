from .defs import TOOL_DEFINITIONS, ToolDefinition
from .registry import ToolRegistry

__all__ = ["TOOL_DEFINITIONS", "ToolDefinition", "ToolRegistry"]
