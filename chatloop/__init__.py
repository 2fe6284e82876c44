"""Shared runtime for the chat completion demos."""

from .errors import ChatError, ConfigurationError, RemoteError, ToolError, ToolExecutionError, UnknownTool
from .message_store import MessageStore, ToolCallRequest, Turn
from .completion_client import Completion, CompletionClient, PlainContent, ToolCalls
from .tool_registry import ToolDeclaration, ToolRegistry, ToolResult
from .conversation import ConversationLoop, LoopState, run_interactive
from .runtime_config import ChatConfig, add_runtime_args, build_openai_client, config_from_args, load_prompt
from .response_store import ResponseStore
from .trace_logger import TraceLogger

__all__ = [
    "ChatError",
    "ConfigurationError",
    "RemoteError",
    "ToolError",
    "ToolExecutionError",
    "UnknownTool",
    "MessageStore",
    "ToolCallRequest",
    "Turn",
    "Completion",
    "CompletionClient",
    "PlainContent",
    "ToolCalls",
    "ToolDeclaration",
    "ToolRegistry",
    "ToolResult",
    "ConversationLoop",
    "LoopState",
    "run_interactive",
    "ChatConfig",
    "add_runtime_args",
    "build_openai_client",
    "config_from_args",
    "load_prompt",
    "ResponseStore",
    "TraceLogger",
]
