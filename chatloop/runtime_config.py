"""Runtime configuration shared by the chat demos."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from openai import OpenAI

from .errors import ConfigurationError


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PROMPTS_DIR = PROJECT_ROOT / "prompts"

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "openai/gpt-oss-20b"

BOOL_TRUE = {"1", "true", "yes", "y", "on"}
BOOL_FALSE = {"0", "false", "no", "n", "off"}


@dataclass
class ChatConfig:
    """Settings merged from CLI and environment, built once at startup."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = 8192
    request_timeout: float = 60.0
    show_llm_response: bool = False
    response_dir: Path = Path("data")
    exit_token: str = "exit"

    def as_dict(self) -> dict:
        """Return JSON-serializable dict form, without the API key."""
        return {
            "base_url": self.base_url,
            "model": self.model,
            "max_tokens": self.max_tokens,
            "request_timeout": self.request_timeout,
            "show_llm_response": self.show_llm_response,
            "response_dir": str(self.response_dir),
            "exit_token": self.exit_token,
        }


def add_runtime_args(parser: Any) -> None:
    """Attach shared runtime flags to an argparse parser."""
    import argparse

    parser.add_argument(
        "--model",
        dest = "model",
        default = None,
        help = f"Model identifier (default: {DEFAULT_MODEL}).",
    )
    parser.add_argument(
        "--base-url",
        dest = "base_url",
        default = None,
        help = "OpenAI-compatible endpoint URL.",
    )
    parser.add_argument(
        "--max-tokens",
        dest = "max_tokens",
        type = int,
        default = None,
        help = "Maximum tokens per completion.",
    )
    parser.add_argument(
        "--request-timeout",
        dest = "request_timeout",
        type = float,
        default = None,
        help = "Seconds before an in-flight completion request is abandoned.",
    )
    parser.add_argument(
        "--show-llm-response",
        dest = "show_llm_response",
        action = argparse.BooleanOptionalAction,
        default = None,
        help = "Show per-turn LLM assistant/tool trace logs.",
    )
    parser.add_argument(
        "--response-dir",
        dest = "response_dir",
        default = None,
        help = "Directory for saved responses (default: data/).",
    )


def config_from_args(args: Any) -> ChatConfig:
    """Build configuration with CLI > ENV > default precedence."""
    api_key = _resolve_str(
        cli_value = None,
        env_name = "LLM_API_KEY",
        default = os.getenv("GROQ_API_KEY", ""),
    )
    if not api_key:
        raise ConfigurationError("LLM_API_KEY (or GROQ_API_KEY) is not defined in environment variables")

    return ChatConfig(
        api_key = api_key,
        base_url = _resolve_str(
            cli_value = getattr(args, "base_url", None),
            env_name = "LLM_BASE_URL",
            default = DEFAULT_BASE_URL,
        ),
        model = _resolve_str(
            cli_value = getattr(args, "model", None),
            env_name = "LLM_MODEL",
            default = DEFAULT_MODEL,
        ),
        max_tokens = max(1, _resolve_int(
            cli_value = getattr(args, "max_tokens", None),
            env_name = "LLM_MAX_TOKENS",
            default = 8192,
        )),
        request_timeout = _resolve_float(
            cli_value = getattr(args, "request_timeout", None),
            env_name = "LLM_REQUEST_TIMEOUT",
            default = 60.0,
        ),
        show_llm_response = _resolve_bool(
            cli_value = getattr(args, "show_llm_response", None),
            env_name = "AGENT_SHOW_LLM_RESPONSE",
            default = False,
        ),
        response_dir = Path(_resolve_str(
            cli_value = getattr(args, "response_dir", None),
            env_name = "AGENT_RESPONSE_DIR",
            default = "data",
        )),
        exit_token = _resolve_str(
            cli_value = None,
            env_name = "AGENT_EXIT_TOKEN",
            default = "exit",
        ).lower(),
    )


def build_openai_client(config: ChatConfig) -> OpenAI:
    """Create the one SDK client for this process; retries are disabled."""
    return OpenAI(
        api_key = config.api_key,
        base_url = config.base_url,
        timeout = config.request_timeout,
        max_retries = 0,
    )


def load_prompt(name: str, prompts_dir: Optional[Path] = None) -> str:
    """Read prompts/<name>.md."""
    path = Path(prompts_dir or PROMPTS_DIR) / f"{name}.md"
    try:
        return path.read_text(encoding = "utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read system prompt {path}: {exc}") from exc


def _resolve_bool(cli_value: Any, env_name: str, default: bool) -> bool:
    """Resolve bool with CLI > ENV > default precedence."""
    if cli_value is not None:
        return bool(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is None:
        return default

    normalized = raw_env.strip().lower()
    if normalized in BOOL_TRUE:
        return True
    if normalized in BOOL_FALSE:
        return False
    return default


def _resolve_int(cli_value: Any, env_name: str, default: int) -> int:
    """Resolve int option with fallback to default on parse failure."""
    if cli_value is not None:
        return int(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is None:
        return default

    try:
        return int(raw_env.strip())
    except ValueError:
        return default


def _resolve_float(cli_value: Any, env_name: str, default: float) -> float:
    """Resolve positive float option; bad or non-positive values use the default."""
    if cli_value is not None and float(cli_value) > 0:
        return float(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is None:
        return default

    try:
        value = float(raw_env.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def _resolve_str(cli_value: Any, env_name: str, default: str) -> str:
    """Resolve string option with CLI > ENV > default precedence."""
    if cli_value is not None and str(cli_value).strip():
        return str(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is not None and raw_env.strip():
        return raw_env.strip()

    return default
