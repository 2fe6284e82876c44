"""Name -> executor capability map with declared input schemas."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .errors import ToolExecutionError, UnknownTool
from .message_store import Turn


logger = logging.getLogger("ToolRegistry")

MAX_RESULT_CHARS = 50000


@dataclass(frozen = True)
class ToolDeclaration:
    """Tool name, description and JSON schema advertised to the model."""

    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory = dict)

    def to_openai(self) -> Dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


@dataclass(frozen = True)
class ToolResult:
    """Output of one tool invocation, bound to the call that requested it."""

    tool_call_id: str
    content: str

    def to_turn(self) -> Turn:
        return Turn(role = "tool", content = self.content, tool_call_id = self.tool_call_id)


@dataclass
class _RegisteredTool:
    declaration: ToolDeclaration
    executor: Callable[..., Any]


class ToolRegistry:
    """Registry of executable tools keyed by unique name."""

    def __init__(self):
        self._tools: Dict[str, _RegisteredTool] = {}

    def register(
        self,
        name: str,
        schema: Dict[str, Any],
        executor: Callable[..., Any],
        description: str = "",
    ) -> ToolDeclaration:
        """Register an executor under a unique name."""
        if not name:
            raise ValueError("Tool name must not be empty")
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")

        declaration = ToolDeclaration(name = name, description = description, input_schema = schema)
        self._tools[name] = _RegisteredTool(declaration = declaration, executor = executor)
        return declaration

    def declarations(self) -> List[ToolDeclaration]:
        """Return declarations in registration order."""
        return [tool.declaration for tool in self._tools.values()]

    def invoke(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
        call_id: Optional[str] = None,
    ) -> ToolResult:
        """Validate arguments against the schema and run the executor."""
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownTool(name)

        arguments = dict(arguments or {})
        _check_arguments(tool.declaration, arguments)

        try:
            output = tool.executor(**arguments)
        except ToolExecutionError:
            raise
        except Exception as exc:
            raise ToolExecutionError(f"Tool '{name}' failed: {exc}", tool_name = name) from exc

        try:
            content = _render_output(output)
        except (TypeError, ValueError) as exc:
            raise ToolExecutionError(f"Tool '{name}' returned unserializable output: {exc}", tool_name = name) from exc

        logger.debug(f"Tool {name} completed")
        return ToolResult(tool_call_id = call_id or name, content = content)


def _check_arguments(declaration: ToolDeclaration, arguments: Dict[str, Any]) -> None:
    """Reject missing required properties and undeclared ones."""
    schema = declaration.input_schema or {}
    properties = schema.get("properties") or {}

    missing = [key for key in schema.get("required", []) if key not in arguments]
    if missing:
        raise ToolExecutionError(
            f"Tool '{declaration.name}' missing required arguments: {', '.join(missing)}",
            tool_name = declaration.name,
        )

    if schema.get("additionalProperties", True) is False:
        unexpected = [key for key in arguments if key not in properties]
        if unexpected:
            raise ToolExecutionError(
                f"Tool '{declaration.name}' got unexpected arguments: {', '.join(unexpected)}",
                tool_name = declaration.name,
            )


def _render_output(output: Any) -> str:
    if isinstance(output, str):
        text = output
    else:
        text = json.dumps(output, ensure_ascii = False)
    return text[:MAX_RESULT_CHARS]
