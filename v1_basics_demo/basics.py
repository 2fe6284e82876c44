import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chatloop.completion_client import Completion, CompletionClient
from chatloop.errors import ChatError
from chatloop.message_store import MessageStore, Turn, user_turn
from chatloop.response_store import ResponseStore
from chatloop.runtime_config import add_runtime_args, build_openai_client, config_from_args


logger = logging.getLogger("V1-Basics")

SYSTEM_PROMPT = "You are a helpful coding assistant."


def build_history() -> MessageStore:
    """
    Build the fixed example conversation about the Target Sum problem.

    Returns:
        MessageStore: System prompt plus three seeded turns.
    """
    store = MessageStore(SYSTEM_PROMPT)
    store.append(user_turn("Hello, how are you?"))
    store.append(Turn(role = "assistant", content = "I'm good! How can I help you today?"))
    store.append(user_turn("Kindly provide me with the JavaScript code solution for the Target Sum problem"))
    return store


def run_once(client: CompletionClient, response_store: ResponseStore) -> Completion:
    """
    Send the example conversation once and save the raw response.

    Args:
        client: Completion client bound to a configured SDK client.
        response_store: Destination for the raw response JSON.
    Returns:
        Completion: The parsed reply.
    """
    completion = client.complete(build_history().all())
    path = response_store.save(completion.raw_response)

    print(f"AI Response: {completion.content}")
    print(f"Full response saved to: {path}")
    return completion


def parse_args(argv = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed CLI arguments.
    """
    import argparse

    parser = argparse.ArgumentParser(description = "Basics - one chat completion, response saved to disk")
    add_runtime_args(parser)
    return parser.parse_args(argv)


def main(argv = None):
    """
    Main function to run the single-shot completion demo.
    """
    args = parse_args(argv)

    logging.basicConfig(
        level = logging.INFO,
        format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers = [logging.StreamHandler()],
    )

    try:
        load_dotenv()
        config = config_from_args(args)

        client = CompletionClient(
            client = build_openai_client(config),
            model = config.model,
            max_tokens = config.max_tokens,
        )
        run_once(client, ResponseStore(config.response_dir))
    except ChatError as exc:
        logger.error(f"Error: {exc}")
        return 1
    except OSError as exc:
        logger.error(f"Error saving file: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
