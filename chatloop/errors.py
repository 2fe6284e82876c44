"""Error hierarchy shared by the chat demos."""

from typing import Optional


class ChatError(Exception):
    """Base for every error raised by the chat runtime."""


class ConfigurationError(ChatError):
    """Missing or invalid startup configuration (e.g., no API key)."""


class RemoteError(ChatError):
    """Completion API unreachable, returned an error status, or sent a malformed payload."""


class ToolError(ChatError):
    """Base for tool dispatch failures."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        super().__init__(message)
        self.tool_name = tool_name


class UnknownTool(ToolError):
    """The model asked for a tool that is not registered."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", tool_name = tool_name)


class ToolExecutionError(ToolError):
    """A registered tool rejected its arguments or failed while running."""
