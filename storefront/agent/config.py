"""Chat configuration with environment variable loading.

Pydantic-based configuration for the storefront chat assistant.
Supports a direct streaming session with a hosted Gemini model or a
non-streaming relay endpoint, selected by CHAT_MODE.
"""

import logging
import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a friendly assistant for our product pages. Answer concisely in "
    "casual english when asked about product specs, shipping, and returns."
)


class ChatMode(str, Enum):
    """Which chat integration is active. Exactly one per process."""

    STREAM = "stream"
    RELAY = "relay"


def _env_timeout() -> float | None:
    """Read CHAT_STREAM_TIMEOUT, falling back to no timeout if it is unusable."""
    raw = os.getenv("CHAT_STREAM_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric CHAT_STREAM_TIMEOUT={raw!r}")
        return None
    if not timeout > 0:
        logger.warning(f"Ignoring non-positive CHAT_STREAM_TIMEOUT={raw!r}")
        return None
    return timeout


class ChatConfig(BaseModel):
    """Configuration for the chat assistant.

    A missing credential is allowed here. It is reported to the user by the
    chat controller instead of failing at startup.

    Attributes:
        api_key: API key for the hosted model, or None when not configured.
        model_name: Model identifier to use.
        system_instruction: Fixed instruction sent with every conversation.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        chat_mode: Direct streaming or relay integration.
        relay_url: Base URL of the chat relay (relay mode only).
        stream_timeout: Seconds before an unfinished reply is abandoned.
    """

    api_key: str | None = Field(
        default_factory=lambda: os.getenv("CHAT_API_KEY", os.getenv("GEMINI_API_KEY", "")),
        validate_default=True,
        description="API key for the hosted chat model",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("CHAT_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        description="System instruction for the assistant",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    chat_mode: ChatMode = Field(
        default_factory=lambda: os.getenv("CHAT_MODE", ChatMode.STREAM.value).lower(),
        validate_default=True,
        description="Chat integration mode: 'stream' or 'relay'",
    )
    relay_url: str = Field(
        default_factory=lambda: os.getenv("CHAT_RELAY_URL", "http://127.0.0.1:8001"),
        description="Base URL of the chat relay",
    )
    stream_timeout: float | None = Field(
        default_factory=_env_timeout,
        gt=0,
        validate_default=True,
        description="Seconds to wait for a complete reply (None = no timeout)",
    )

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        """Strip the API key and treat blank values as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_credential(self) -> bool:
        return self.api_key is not None


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.
    """
    return ChatConfig()
