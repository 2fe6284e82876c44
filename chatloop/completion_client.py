"""Chat completion adapter that turns SDK responses into tagged replies."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import openai

from .errors import RemoteError
from .message_store import ToolCallRequest, Turn


@dataclass(frozen = True)
class PlainContent:
    """Assistant answered with text only."""

    text: str


@dataclass(frozen = True)
class ToolCalls:
    """Assistant asked for one or more tools to be invoked."""

    requests: Tuple[ToolCallRequest, ...]
    text: str = ""


Reply = Union[PlainContent, ToolCalls]


@dataclass
class Completion:
    """One completion exchange: the tagged reply plus the dumped SDK response."""

    reply: Reply
    raw_response: Any = None

    @property
    def content(self) -> str:
        return self.reply.text

    @property
    def tool_calls(self) -> Tuple[ToolCallRequest, ...]:
        if isinstance(self.reply, ToolCalls):
            return self.reply.requests
        return ()

    def to_turn(self) -> Turn:
        """Build the assistant Turn to append to the message store."""
        if isinstance(self.reply, ToolCalls):
            return Turn(
                role = "assistant",
                content = self.reply.text or None,
                tool_calls = self.reply.requests,
            )
        return Turn(role = "assistant", content = self.reply.text)


class CompletionClient:
    """Send the full history to an OpenAI-compatible endpoint and parse one reply."""

    def __init__(self, client: Any, model: str, max_tokens: int = 8192):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    def complete(
        self,
        history: Sequence[Turn],
        tool_declarations: Optional[Sequence[Any]] = None,
    ) -> Completion:
        """Call chat completion once with the unmodified history."""
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": [turn.to_message() for turn in history],
            "max_tokens": self.max_tokens,
        }

        if tool_declarations:
            request["tools"] = [_declaration_to_openai(item) for item in tool_declarations]

        try:
            response = self.client.chat.completions.create(**request)
        except openai.APIError as exc:
            raise RemoteError(f"Completion request failed: {exc}") from exc

        return parse_completion(response)


def parse_completion(response: Any) -> Completion:
    """Normalize an SDK response (object or dict) into a Completion."""
    choices = _read_obj(response, "choices")
    if not choices:
        raise RemoteError("Malformed completion payload: no choices")

    message = _read_obj(choices[0], "message")
    if message is None:
        raise RemoteError("Malformed completion payload: choice has no message")

    content = _coerce_text(_read_obj(message, "content"))
    requests = _normalize_tool_calls(_read_obj(message, "tool_calls"))

    if requests:
        reply: Reply = ToolCalls(requests = tuple(requests), text = content)
    else:
        reply = PlainContent(text = content)

    return Completion(
        reply = reply,
        raw_response = _safe_model_dump(response),
    )


def _declaration_to_openai(declaration: Any) -> Dict[str, Any]:
    to_openai = getattr(declaration, "to_openai", None)
    if callable(to_openai):
        return to_openai()
    return declaration


def _normalize_tool_calls(tool_calls: Any) -> List[ToolCallRequest]:
    """Convert SDK tool call objects to ToolCallRequest values."""
    normalized = []
    if not tool_calls:
        return normalized

    for index, tool_call in enumerate(tool_calls):
        function_payload = _read_obj(tool_call, "function") or {}
        name = _read_obj(function_payload, "name") or ""
        if not name:
            raise RemoteError("Malformed completion payload: tool call without a name")

        normalized.append(
            ToolCallRequest(
                call_id = _read_obj(tool_call, "id") or f"call_{index}",
                name = name,
                arguments = _parse_tool_args(_read_obj(function_payload, "arguments")),
            )
        )
    return normalized


def _parse_tool_args(arguments: Any) -> Dict[str, Any]:
    """Parse tool call arguments, tolerating stray control characters."""
    if isinstance(arguments, dict):
        return arguments
    if arguments is None or arguments == "":
        return {}
    if not isinstance(arguments, str):
        raise RemoteError(f"Malformed tool arguments: expected a JSON string, got {type(arguments).__name__}")

    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError:
        cleaned = "".join(character for character in arguments if character >= " " or character in "\t\n\r")
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise RemoteError(f"Malformed tool arguments: {arguments!r}") from exc

    if not isinstance(parsed, dict):
        raise RemoteError(f"Tool arguments must be a JSON object, got: {arguments!r}")
    return parsed


def _coerce_text(value: Any) -> str:
    """Flatten value to text conservatively."""
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    if isinstance(value, list):
        return "".join(_coerce_text(item) for item in value)

    if isinstance(value, dict):
        if "text" in value:
            return _coerce_text(value.get("text"))
        if "content" in value:
            return _coerce_text(value.get("content"))
        return ""

    for attr_name in ["text", "content"]:
        attr_value = getattr(value, attr_name, None)
        if attr_value is not None:
            return _coerce_text(attr_value)

    return str(value)


def _read_obj(obj: Any, key: str) -> Any:
    """Read key from object or dict safely."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _safe_model_dump(obj: Any) -> Any:
    """Best-effort conversion of SDK objects to plain dicts."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj

    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return model_dump()

    return str(obj)
