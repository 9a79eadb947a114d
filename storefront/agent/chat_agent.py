"""Agno agent service that streams replies from the hosted chat model.

Core module for the assistant's model access.

Architecture Decisions:

1. **In-memory session db** - Agno only threads earlier turns into the
   context when the agent has a db. Chat history is not meant to outlive the
   process, so an InMemoryDb gives multi-turn context without persistence.

2. **Credential checked at construction** - The service refuses to build
   without an API key. Callers decide how to surface that (the chat widget
   shows a notice, the relay API answers 503).

3. **Errors raised, not yielded** - A failed run raises ChatStreamError so the
   caller can tell an apology apart from genuine model text.

4. **Streaming Generator** - Agno returns run events with metadata. We extract
   just the content string, providing a plain fragment stream.
"""

import logging
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.db.in_memory import InMemoryDb
from agno.models.google import Gemini

from storefront.agent.config import ChatConfig, get_chat_config

logger = logging.getLogger(__name__)

_RUN_ERROR_EVENT = "RunError"


class ChatConfigurationError(Exception):
    """Raised when the chat model cannot be used with the current configuration."""

    pass


class ChatStreamError(Exception):
    """Raised when a chat request fails to open or breaks mid-stream."""

    pass


class AgentService:
    """Service for managing the Agno chat agent.

    Wraps Agno's Agent with:
    - Gemini model with the storefront system instruction
    - In-memory session history for follow-up questions
    - Singleton lifecycle management
    - Clean streaming interface for the chat widget and SSE endpoint
    """

    def __init__(self, config: ChatConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional chat configuration.
                    Loads from environment if not provided.

        Raises:
            ChatConfigurationError: If no API key is configured.
        """
        self._config = config or get_chat_config()
        if not self._config.has_credential:
            raise ChatConfigurationError(
                "API key required. Set CHAT_API_KEY or GEMINI_API_KEY in .env"
            )
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with Gemini model and in-memory history.
        """
        model = Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            db=InMemoryDb(),
            instructions=self._config.system_instruction,
            # Last 5 runs (~5 question/answer pairs) go back into the context
            add_history_to_context=True,
            num_history_runs=5,
            # Output as markdown for rich formatting in the chat bubble
            markdown=True,
        )

    async def stream_response(
        self,
        message: str,
        session_id: str,
    ) -> AsyncGenerator[str]:
        """Stream response chunks for a message.

        Args:
            message: The user's message.
            session_id: Session identifier for history tracking.

        Yields:
            Response text fragments in arrival order.

        Raises:
            ChatStreamError: If the run cannot be started or fails mid-stream.
        """
        try:
            response_stream = self._agent.arun(
                message,
                session_id=session_id,
                stream=True,
            )

            async for chunk in response_stream:
                if getattr(chunk, "event", None) == _RUN_ERROR_EVENT:
                    raise ChatStreamError(chunk.content or "Model run failed")
                if hasattr(chunk, "content") and chunk.content:
                    yield chunk.content

        except ChatStreamError:
            raise
        except Exception as e:
            logger.error(f"Streaming run failed for session {session_id}: {e}")
            raise ChatStreamError(str(e)) from e

    async def get_response(
        self,
        message: str,
        session_id: str,
    ) -> str:
        """Get complete response for a message.

        Non-streaming alternative used by the relay endpoint.

        Args:
            message: The user's message.
            session_id: Session identifier for history tracking.

        Returns:
            Complete response text.

        Raises:
            ChatStreamError: If the model call fails.
        """
        try:
            response = await self._agent.arun(
                message,
                session_id=session_id,
            )
        except Exception as e:
            logger.error(f"Run failed for session {session_id}: {e}")
            raise ChatStreamError(str(e)) from e

        return response.content or ""


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.

    Raises:
        ChatConfigurationError: If no API key is configured.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
