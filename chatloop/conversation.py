"""Conversation loop: history, completions and tool dispatch, turn by turn."""

import logging
import sys
from enum import Enum
from typing import Callable, Optional

from .completion_client import Completion, CompletionClient, ToolCalls
from .errors import ChatError
from .message_store import MessageStore, user_turn
from .tool_registry import ToolRegistry
from .trace_logger import TraceLogger, summarize_tool_call


logger = logging.getLogger("ConversationLoop")

USER_PROMPT = "\033[94mUser:\033[0m "


class LoopState(Enum):
    AWAITING_INPUT = "awaiting_input"
    COMPLETING = "completing"
    TOOL_DISPATCH = "tool_dispatch"
    DONE = "done"
    TERMINATED = "terminated"


class ConversationLoop:
    """Drive one conversation strictly turn by turn.

    Each user line is appended to the store and the full history is sent to
    the completion client. Tool-call replies are dispatched through the
    registry and their results appended right after the requesting assistant
    turn, then the client is called again without new user input. A plain
    reply is appended, displayed and ends the round.

    Errors from the client or the registry propagate to the caller; a failed
    completion never appends a partial assistant turn.
    """

    def __init__(
        self,
        client: CompletionClient,
        store: MessageStore,
        registry: Optional[ToolRegistry] = None,
        tracer: Optional[TraceLogger] = None,
        input_func: Callable[[str], str] = input,
        output_stream = None,
        exit_token: str = "exit",
        prompt: str = USER_PROMPT,
    ):
        self.client = client
        self.store = store
        self.registry = registry or ToolRegistry()
        self.tracer = tracer or TraceLogger(enabled = False)
        self.input_func = input_func
        self.output_stream = output_stream or sys.stdout
        self.exit_token = exit_token.strip().lower()
        self.prompt = prompt
        self.state = LoopState.AWAITING_INPUT

    def run(self) -> None:
        """Read user lines until the exit token or end of input."""
        while self.state is not LoopState.TERMINATED:
            self.state = LoopState.AWAITING_INPUT
            try:
                line = self.input_func(self.prompt)
            except EOFError:
                self.state = LoopState.TERMINATED
                break

            text = line.strip()
            if self.is_exit(text):
                self.state = LoopState.TERMINATED
                break

            if not text:
                continue

            self.submit(text)

    def is_exit(self, text: str) -> bool:
        return text.strip().lower() == self.exit_token

    def submit(self, text: str) -> str:
        """Run one user turn to a plain assistant reply and return its text."""
        self.store.append(user_turn(text))

        while True:
            self.state = LoopState.COMPLETING
            completion = self.client.complete(self.store.all(), self.registry.declarations())
            self.store.append(completion.to_turn())
            self.tracer.log_turn(
                assistant_content = completion.content,
                tool_calls = completion.tool_calls,
            )

            if not isinstance(completion.reply, ToolCalls):
                self.state = LoopState.DONE
                self._display(completion)
                return completion.content

            self.state = LoopState.TOOL_DISPATCH
            self._dispatch(completion.reply)

    def _dispatch(self, reply: ToolCalls) -> None:
        for request in reply.requests:
            self._write(f"\033[33m> {summarize_tool_call(request)}\033[0m\n")
            result = self.registry.invoke(request.name, request.arguments, call_id = request.call_id)
            self.store.append(result.to_turn())
            self.tracer.log_tool_result(request.name, result.content)

    def _display(self, completion: Completion) -> None:
        self._write(f"\033[92mAssistant:\033[0m {completion.content}\n")

    def _write(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()


def run_interactive(loop: ConversationLoop, run_logger: Optional[logging.Logger] = None) -> int:
    """Run the loop and map its outcome to a process exit status."""
    run_logger = run_logger or logger
    try:
        loop.run()
    except KeyboardInterrupt:
        run_logger.info("Conversation interrupted.")
        return 0
    except ChatError as exc:
        run_logger.error(f"Error: {exc}")
        return 1

    run_logger.info("Conversation ended.")
    return 0
