"""Unit tests for the completion client adapter (no network)."""

import os
import sys
from types import SimpleNamespace

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tests.utils import ECHO_SCHEMA, FakeSDKClient, connection_error, make_response, run_tests
from chatloop.completion_client import CompletionClient, PlainContent, ToolCalls
from chatloop.errors import RemoteError
from chatloop.message_store import MessageStore, Turn, user_turn
from chatloop.tool_registry import ToolRegistry


def _history():
    store = MessageStore("sys")
    store.append(user_turn("hi"))
    store.append(Turn(role = "assistant", content = "hello"))
    store.append(user_turn("again"))
    return store.all()


def test_plain_reply_and_full_history():
    """Request carries the whole history in order; text becomes PlainContent."""
    sdk = FakeSDKClient([make_response(content = "pong")])
    client = CompletionClient(client = sdk, model = "m", max_tokens = 64)

    completion = client.complete(_history())

    assert isinstance(completion.reply, PlainContent)
    assert completion.content == "pong"
    request = sdk.requests[0]
    assert request["model"] == "m"
    assert request["max_tokens"] == 64
    assert [message["content"] for message in request["messages"]] == ["sys", "hi", "hello", "again"]
    assert "tools" not in request, "Empty declarations must not send a tools field"

    turn = completion.to_turn()
    assert turn.role == "assistant" and turn.content == "pong"

    print("PASS: test_plain_reply_and_full_history")
    return True


def test_tool_call_reply():
    """Tool calls are parsed into ToolCalls with decoded arguments."""
    sdk = FakeSDKClient([
        make_response(content = None, tool_calls = [("call_1", "echo", '{"text": "hey"}')]),
    ])
    registry = ToolRegistry()
    registry.register("echo", ECHO_SCHEMA, lambda text: text, description = "Echo")
    client = CompletionClient(client = sdk, model = "m")

    completion = client.complete(_history(), registry.declarations())

    assert isinstance(completion.reply, ToolCalls)
    request = completion.reply.requests[0]
    assert request.call_id == "call_1"
    assert request.name == "echo"
    assert request.arguments == {"text": "hey"}
    assert sdk.requests[0]["tools"][0]["function"]["name"] == "echo"

    turn = completion.to_turn()
    assert turn.content is None
    assert turn.tool_calls == (request,)

    print("PASS: test_tool_call_reply")
    return True


def test_api_error_becomes_remote_error():
    """SDK connection failures surface as RemoteError."""
    sdk = FakeSDKClient([connection_error()])
    client = CompletionClient(client = sdk, model = "m")

    try:
        client.complete(_history())
        assert False, "Expected RemoteError"
    except RemoteError as exc:
        assert exc.__cause__ is not None

    print("PASS: test_api_error_becomes_remote_error")
    return True


def test_malformed_payloads_raise_remote_error():
    """Missing choices, bad or non-string tool arguments and nameless tool calls are rejected."""
    bad_responses = [
        SimpleNamespace(id = "r", model = "m", choices = [], usage = None),
        make_response(tool_calls = [("call_1", "echo", "{not json")]),
        make_response(tool_calls = [("call_1", "echo", "[1, 2]")]),
        make_response(tool_calls = [("call_1", "", "{}")]),
        make_response(tool_calls = [("call_1", "echo", [1, 2])]),
        make_response(tool_calls = [("call_1", "echo", 7)]),
    ]
    for response in bad_responses:
        client = CompletionClient(client = FakeSDKClient([response]), model = "m")
        try:
            client.complete(_history())
            assert False, f"Expected RemoteError for {response}"
        except RemoteError:
            pass

    print("PASS: test_malformed_payloads_raise_remote_error")
    return True


if __name__ == "__main__":
    sys.exit(0 if run_tests([
        test_plain_reply_and_full_history,
        test_tool_call_reply,
        test_api_error_becomes_remote_error,
        test_malformed_payloads_raise_remote_error,
    ]) else 1)
