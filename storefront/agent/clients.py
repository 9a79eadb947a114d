"""Chat client selection and the non-streaming relay client.

A chat client is any object with ``stream_response(message, session_id)``
returning an async iterator of text fragments. The chat controller only
depends on that shape.
"""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from typing import Protocol

import httpx

from storefront.agent.chat_agent import AgentService, ChatStreamError
from storefront.agent.config import ChatConfig, ChatMode

logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """Producer of reply fragments for one user message."""

    def stream_response(self, message: str, session_id: str) -> AsyncIterator[str]: ...


class RelayChatClient:
    """Client for a backend relay exposing ``POST /api/chat``.

    The relay answers with the whole reply at once, so the stream
    yields a single fragment.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/api/chat"
        self._client = client
        self._timeout = timeout

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, str]) -> str:
        response = await client.post(self._url, json=payload)
        response.raise_for_status()
        data = response.json()
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ChatStreamError("Relay response is missing a 'reply' string")
        return reply

    async def stream_response(self, message: str, session_id: str) -> AsyncGenerator[str]:
        """Send the message to the relay and yield its reply.

        Raises:
            ChatStreamError: On transport errors, non-2xx status or a malformed body.
        """
        payload = {"message": message, "session_id": session_id}
        try:
            if self._client is not None:
                reply = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    reply = await self._post(client, payload)
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat relay returned HTTP {e.response.status_code}")
            raise ChatStreamError(f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Chat relay connection failed: {e}")
            raise ChatStreamError(f"Connection failed: {e}") from e
        except ValueError as e:
            logger.error(f"Chat relay returned a non-JSON body: {e}")
            raise ChatStreamError("Malformed relay response") from e

        if reply:
            yield reply


def build_chat_client(config: ChatConfig) -> ChatClient | None:
    """Build the client for the configured chat mode.

    Returns:
        The active chat client, or None when streaming mode has no credential.
    """
    if config.chat_mode == ChatMode.RELAY:
        logger.info(f"Chat relay mode via {config.relay_url}")
        return RelayChatClient(config.relay_url)

    if not config.has_credential:
        logger.warning("Chat API key is not configured; chat is disabled")
        return None

    logger.info(f"Chat streaming mode with model {config.model_name}")
    return AgentService(config)
