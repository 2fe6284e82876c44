import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chatloop.completion_client import CompletionClient
from chatloop.conversation import ConversationLoop, run_interactive
from chatloop.errors import ConfigurationError
from chatloop.message_store import MessageStore
from chatloop.runtime_config import ChatConfig, add_runtime_args, build_openai_client, config_from_args, load_prompt
from chatloop.tool_registry import ToolRegistry
from chatloop.trace_logger import TraceLogger
from v3_tool_chat_demo.tools import build_registry


logger = logging.getLogger("V3-Tool-Chat")


def build_loop(
    config: ChatConfig,
    client: CompletionClient,
    registry: ToolRegistry,
    system_prompt: str,
    **loop_kwargs,
) -> ConversationLoop:
    """
    Wire a conversation loop that can dispatch tool calls.

    Args:
        config: Startup configuration.
        client: Completion client to send history to.
        registry: Tools advertised to the model.
        system_prompt: Fixed first turn of the conversation.
    Returns:
        ConversationLoop: Ready to run.
    """
    return ConversationLoop(
        client = client,
        store = MessageStore(system_prompt),
        registry = registry,
        tracer = TraceLogger(enabled = config.show_llm_response, logger = logger),
        exit_token = config.exit_token,
        **loop_kwargs,
    )


def parse_args(argv = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed CLI arguments.
    """
    import argparse

    parser = argparse.ArgumentParser(description = "Tool Chat - multi-turn chat with weather and email tools")
    add_runtime_args(parser)
    return parser.parse_args(argv)


def main(argv = None):
    """
    Main function to run the tool chat from command line.
    """
    args = parse_args(argv)

    logging.basicConfig(
        level = logging.INFO,
        format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers = [logging.StreamHandler()],
    )

    load_dotenv()
    try:
        config = config_from_args(args)
        system_prompt = load_prompt("tool_chat")
    except ConfigurationError as exc:
        logger.error(f"Error: {exc}")
        return 1

    client = CompletionClient(
        client = build_openai_client(config),
        model = config.model,
        max_tokens = config.max_tokens,
    )
    registry = build_registry()
    loop = build_loop(config, client, registry, system_prompt)

    logger.info("=" * 80)
    logger.info(f"Tool chat started with model {config.model}")
    logger.info("=" * 80)
    logger.info(f"Tools: {', '.join(declaration.name for declaration in registry.declarations())}")
    logger.info(f"Type '{config.exit_token}' to end the conversation")
    logger.info("-" * 60)

    return run_interactive(loop, logger)


if __name__ == "__main__":
    sys.exit(main())
