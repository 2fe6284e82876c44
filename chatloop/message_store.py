"""Append-only conversation history seeded with one system instruction."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


ROLES = {"system", "user", "assistant", "tool"}


@dataclass(frozen = True)
class ToolCallRequest:
    """One tool invocation requested by the model."""

    call_id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory = dict)

    def to_openai(self) -> Dict[str, Any]:
        """Render the OpenAI-compatible tool_call entry."""
        return {
            "id": self.call_id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(self.arguments, ensure_ascii = False),
            },
        }


@dataclass(frozen = True)
class Turn:
    """One message in the conversation, attributed to a role."""

    role: str
    content: Optional[str] = None
    tool_calls: Tuple[ToolCallRequest, ...] = ()
    tool_call_id: Optional[str] = None

    def to_message(self) -> Dict[str, Any]:
        """Convert to an OpenAI-compatible chat message dict."""
        message: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [request.to_openai() for request in self.tool_calls]
        if self.tool_call_id is not None:
            message["tool_call_id"] = self.tool_call_id
        return message


def system_turn(content: str) -> Turn:
    return Turn(role = "system", content = content)


def user_turn(content: str) -> Turn:
    return Turn(role = "user", content = content)


class MessageStore:
    """Ordered, append-only sequence of Turns.

    The first Turn is the system instruction given at creation; it is never
    removed or replaced. Insertion order is causal order.
    """

    def __init__(self, system_prompt: str):
        self._turns: List[Turn] = [system_turn(system_prompt)]

    def append(self, turn: Turn) -> None:
        """Add a Turn to the end of the history."""
        if not isinstance(turn, Turn):
            raise ValueError(f"Expected a Turn, got {type(turn).__name__}")
        if turn.role not in ROLES:
            raise ValueError(f"Unknown role: {turn.role!r}")
        if turn.role == "system":
            raise ValueError("The system turn is fixed at creation")
        if turn.role == "tool" and not turn.tool_call_id:
            raise ValueError("Tool turns require a tool_call_id")
        self._turns.append(turn)

    def all(self) -> Tuple[Turn, ...]:
        """Return the full ordered history as a read-only tuple."""
        return tuple(self._turns)

    def to_messages(self) -> List[Dict[str, Any]]:
        """Return the history in OpenAI chat message format."""
        return [turn.to_message() for turn in self._turns]

    def __len__(self) -> int:
        return len(self._turns)
