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
from chatloop.trace_logger import TraceLogger


logger = logging.getLogger("V2-Chat-Bot")

INPUT_PROMPT = "Enter your message : "


def build_loop(config: ChatConfig, client: CompletionClient, system_prompt: str, **loop_kwargs) -> ConversationLoop:
    """
    Wire a tool-less conversation loop around a fresh message store.

    Args:
        config: Startup configuration.
        client: Completion client to send history to.
        system_prompt: Fixed first turn of the conversation.
    Returns:
        ConversationLoop: Ready to run.
    """
    return ConversationLoop(
        client = client,
        store = MessageStore(system_prompt),
        tracer = TraceLogger(enabled = config.show_llm_response, logger = logger),
        exit_token = config.exit_token,
        prompt = INPUT_PROMPT,
        **loop_kwargs,
    )


def parse_args(argv = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed CLI arguments.
    """
    import argparse

    parser = argparse.ArgumentParser(description = "Chat Bot - multi-turn chat with conversation history")
    add_runtime_args(parser)
    return parser.parse_args(argv)


def main(argv = None):
    """
    Main function to run the chat bot from command line.
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
        system_prompt = load_prompt("chat_bot")
    except ConfigurationError as exc:
        logger.error(f"Error: {exc}")
        return 1

    client = CompletionClient(
        client = build_openai_client(config),
        model = config.model,
        max_tokens = config.max_tokens,
    )
    loop = build_loop(config, client, system_prompt)

    logger.info("=" * 80)
    logger.info(f"Chat bot started with model {config.model}")
    logger.info("=" * 80)
    logger.info(f"Type '{config.exit_token}' to end the conversation")
    logger.info("-" * 60)

    status = run_interactive(loop, logger)
    if status == 0:
        print("Exiting chat bot...")
    return status


if __name__ == "__main__":
    sys.exit(main())
