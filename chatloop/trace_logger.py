"""Per-turn LLM response trace logger."""

import json
import logging
from typing import Optional, Sequence

from .message_store import ToolCallRequest


class TraceLogger:
    """Conditional trace logging for assistant replies and tool calls."""

    def __init__(self, enabled: bool, logger: Optional[logging.Logger] = None):
        self.enabled = bool(enabled)
        self.logger = logger or logging.getLogger("TraceLogger")

    def log_turn(
        self,
        assistant_content: str,
        tool_calls: Optional[Sequence[ToolCallRequest]] = None,
    ) -> None:
        """Log assistant text and tool-call summaries."""
        if not self.enabled:
            return

        content_preview = _shorten(assistant_content or "", 400)
        self.logger.info(f"[LLM] assistant: {content_preview or '(empty)'}")

        if tool_calls:
            summary = "; ".join(summarize_tool_call(tool_call) for tool_call in tool_calls)
            self.logger.info(f"[LLM] tool_calls: {summary}")

    def log_tool_result(self, tool_name: str, content: str) -> None:
        if not self.enabled:
            return
        self.logger.info(f"[TOOL] {tool_name} -> {_shorten(content or '', 200)}")


def summarize_tool_call(tool_call: ToolCallRequest) -> str:
    """Build compact 'name(args)' summary from a tool call request."""
    args_preview = json.dumps(tool_call.arguments, ensure_ascii = False)
    return f"{tool_call.name}({_shorten(args_preview, 160)})"


def _shorten(text: str, max_chars: int) -> str:
    """Trim long text for concise logs."""
    normalized = text.replace("\n", "\\n").strip()
    if len(normalized) <= max_chars:
        return normalized
    return normalized[:max_chars] + "..."
