"""Agno agent logic for the storefront chat assistant.

Handles the hosted model session and the alternative relay integration.

Responsibilities:
    - Agent initialization with the Gemini model and system instruction
    - Conversation context per chat session
    - Streaming fragment generation
    - Relay client for deployments that proxy chat through a backend

Maintains clean separation from the HTTP and UI layers.
"""

from storefront.agent.chat_agent import (
    AgentService,
    ChatConfigurationError,
    ChatStreamError,
    get_agent_service,
)
from storefront.agent.clients import ChatClient, RelayChatClient, build_chat_client
from storefront.agent.config import ChatConfig, ChatMode, get_chat_config

__all__ = [
    "AgentService",
    "ChatClient",
    "ChatConfig",
    "ChatConfigurationError",
    "ChatMode",
    "ChatStreamError",
    "RelayChatClient",
    "build_chat_client",
    "get_agent_service",
    "get_chat_config",
]
