"""
Tools exposed to the model in the tool chat demo.

Each tool needs:
1. A JSON schema the model sees when deciding to call it.
2. A Python executor that runs the call and returns a dict.
"""

import os
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Callable, Dict, Optional

from chatloop.tool_registry import ToolRegistry


GET_WEATHER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "location": {
            "type": "string",
            "description": "City name, e.g. 'Paris' or 'New York'.",
        },
        "unit": {
            "type": "string",
            "enum": ["celsius", "fahrenheit"],
            "description": "Temperature unit (default celsius).",
        },
    },
    "required": ["location"],
    "additionalProperties": False,
}

SEND_EMAIL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "to": {
            "type": "string",
            "description": "Recipient email address.",
        },
        "subject": {
            "type": "string",
            "description": "Email subject line.",
        },
        "body": {
            "type": "string",
            "description": "Plain-text email body.",
        },
    },
    "required": ["to", "subject", "body"],
    "additionalProperties": False,
}

# Canned readings in celsius.
MOCK_WEATHER: Dict[str, Dict[str, Any]] = {
    "london": {"temperature": 14, "condition": "light rain", "humidity": 82},
    "new york": {"temperature": 22, "condition": "sunny", "humidity": 55},
    "paris": {"temperature": 18, "condition": "partly cloudy", "humidity": 64},
    "tokyo": {"temperature": 26, "condition": "humid", "humidity": 78},
    "delhi": {"temperature": 34, "condition": "hazy", "humidity": 40},
}


def get_weather(location: str, unit: str = "celsius") -> dict:
    """
    Look up mock weather for a city.

    Parameters:
        location: City name, matched case-insensitively.
        unit: "celsius" or "fahrenheit".
    """
    key = location.strip().lower()
    if key not in MOCK_WEATHER:
        raise ValueError(f"No weather data for location: {location}")
    if unit not in {"celsius", "fahrenheit"}:
        raise ValueError(f"Unsupported unit: {unit}")

    reading = dict(MOCK_WEATHER[key])
    if unit == "fahrenheit":
        reading["temperature"] = round(reading["temperature"] * 9 / 5 + 32)
    reading.update({"location": location.strip(), "unit": unit})
    return reading


@dataclass
class MailSettings:
    """SMTP transport settings read from the environment."""

    host: str = ""
    port: int = 587
    username: str = ""
    password: str = ""
    sender: str = ""
    use_tls: bool = True

    @classmethod
    def from_env(cls) -> "MailSettings":
        raw_port = os.getenv("SMTP_PORT", "587").strip()
        username = os.getenv("SMTP_USERNAME", "")
        return cls(
            host = os.getenv("SMTP_HOST", ""),
            port = int(raw_port) if raw_port.isdigit() else 587,
            username = username,
            password = os.getenv("SMTP_PASSWORD", ""),
            sender = os.getenv("MAIL_FROM", username),
            use_tls = os.getenv("SMTP_STARTTLS", "1").strip().lower() not in {"0", "false", "no", "off"},
        )


def make_send_email(
    settings: MailSettings,
    smtp_factory: Callable[..., Any] = smtplib.SMTP,
) -> Callable[..., dict]:
    """Bind an SMTP transport to a send_email executor."""

    def send_email(to: str, subject: str, body: str) -> dict:
        """
        Send a plain-text email.

        Parameters:
            to: Recipient address.
            subject: Subject line.
            body: Message body.
        """
        if not settings.host:
            raise RuntimeError("SMTP_HOST is not configured")

        message = EmailMessage()
        message["From"] = settings.sender or settings.username
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        with smtp_factory(settings.host, settings.port, timeout = 30) as smtp:
            if settings.use_tls:
                smtp.starttls()
            if settings.username:
                smtp.login(settings.username, settings.password)
            smtp.send_message(message)

        return {"status": "sent", "to": to, "subject": subject}

    return send_email


def build_registry(mail_settings: Optional[MailSettings] = None, smtp_factory: Callable[..., Any] = smtplib.SMTP) -> ToolRegistry:
    """Register the demo tools."""
    registry = ToolRegistry()
    registry.register(
        name = "get_weather",
        schema = GET_WEATHER_SCHEMA,
        executor = get_weather,
        description = "Get the current weather for a city (mock data).",
    )
    registry.register(
        name = "send_email",
        schema = SEND_EMAIL_SCHEMA,
        executor = make_send_email(mail_settings or MailSettings.from_env(), smtp_factory = smtp_factory),
        description = "Send a plain-text email to a recipient.",
    )
    return registry
