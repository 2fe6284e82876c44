"""
Shared test utilities for this repository.

Provides:
1) Fake OpenAI-compatible SDK client returning canned responses
2) Scripted completion client for conversation loop tests
3) Tool schema constants
4) Common test runner
"""

import json
import traceback
from types import SimpleNamespace

import httpx
import openai

from chatloop.completion_client import Completion, PlainContent, ToolCalls
from chatloop.message_store import ToolCallRequest


ECHO_SCHEMA = {
    "type": "object",
    "properties": {"text": {"type": "string"}},
    "required": ["text"],
    "additionalProperties": False,
}


def make_response(content = "", tool_calls = None, response_id = "resp-1"):
    """
    Build an SDK-shaped chat completion response.

    Parameters:
        content: Assistant text.
        tool_calls: List of (call_id, name, arguments_json) tuples.
        response_id: Value for response.id.
    """
    calls = None
    if tool_calls:
        calls = [
            SimpleNamespace(
                id = call_id,
                type = "function",
                function = SimpleNamespace(name = name, arguments = arguments),
            )
            for call_id, name, arguments in tool_calls
        ]
    message = SimpleNamespace(role = "assistant", content = content, tool_calls = calls)
    return SimpleNamespace(
        id = response_id,
        model = "test-model",
        choices = [SimpleNamespace(index = 0, message = message, finish_reason = "stop")],
        usage = None,
    )


def connection_error():
    """Return an openai.APIConnectionError without touching the network."""
    return openai.APIConnectionError(
        message = "Connection error.",
        request = httpx.Request("POST", "https://example.invalid/v1/chat/completions"),
    )


class FakeSDKClient:
    """Mimics client.chat.completions.create and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []
        self.chat = SimpleNamespace(completions = SimpleNamespace(create = self._create))

    def _create(self, **request):
        self.requests.append(json.loads(json.dumps(request)))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def plain(text):
    return Completion(reply = PlainContent(text = text))


def tool_call(name, arguments = None, call_id = "call_1", text = ""):
    request = ToolCallRequest(call_id = call_id, name = name, arguments = arguments or {})
    return Completion(reply = ToolCalls(requests = (request,), text = text))


class ScriptedCompletionClient:
    """
    Completion client double that replays scripted replies.

    Each script entry is a Completion, an Exception to raise, or a callable
    taking the history and returning a Completion.
    """

    def __init__(self, script):
        self.script = list(script)
        self.calls = []

    def complete(self, history, tool_declarations = None):
        self.calls.append(
            {
                "history": tuple(history),
                "tools": [declaration.name for declaration in tool_declarations or []],
            }
        )
        if not self.script:
            raise AssertionError("Unexpected completion call")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(history)
        return item


def scripted_input(lines):
    """Return an input() replacement yielding lines, then EOFError."""
    remaining = list(lines)

    def _input(prompt = ""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


def run_tests(test_functions):
    """
    Run test callables and print a compact summary.

    Parameters:
        test_functions: List of test functions.
    """
    failed = []
    for test_function in test_functions:
        print(f"\n{'=' * 60}")
        print(f"Running: {test_function.__name__}")
        print("=" * 60)
        try:
            if not test_function():
                failed.append(test_function.__name__)
        except Exception as exc:
            print(f"FAILED: {exc}")
            traceback.print_exc()
            failed.append(test_function.__name__)

    passed = len(test_functions) - len(failed)
    print(f"\n{'=' * 60}")
    print(f"Results: {passed}/{len(test_functions)} passed")
    print("=" * 60)
    if failed:
        print(f"FAILED: {failed}")
        return False
    print("All tests passed!")
    return True
