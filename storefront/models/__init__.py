"""Pydantic models for the storefront and its chat assistant.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Product: A single catalog item
    - ChatRole / ChatMessage: Transcript entries shown in the chat widget
    - RelayChatRequest / RelayChatResponse: Non-streaming chat relay payloads
    - StreamChunk / StreamStatus: Server-Sent Event payloads
"""

from storefront.models.schemas import (
    ChatMessage,
    ChatRole,
    Product,
    RelayChatRequest,
    RelayChatResponse,
    StreamChunk,
    StreamStatus,
)

__all__ = [
    "ChatMessage",
    "ChatRole",
    "Product",
    "RelayChatRequest",
    "RelayChatResponse",
    "StreamChunk",
    "StreamStatus",
]
