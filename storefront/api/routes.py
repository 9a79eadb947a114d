"""Chat relay endpoints.

``POST /api/chat`` returns the whole reply at once for clients using the
relay integration. ``POST /chat/stream`` streams the reply as Server-Sent
Events carrying StreamChunk JSON.
"""

import logging
import uuid
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from storefront.agent.chat_agent import (
    AgentService,
    ChatConfigurationError,
    ChatStreamError,
    get_agent_service,
)
from storefront.models.schemas import (
    RelayChatRequest,
    RelayChatResponse,
    StreamChunk,
    StreamStatus,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def require_agent_service() -> AgentService:
    """Resolve the agent service or answer 503 when chat is not configured.

    Raises:
        HTTPException: 503 if no API key is configured.
    """
    try:
        return get_agent_service()
    except ChatConfigurationError as e:
        logger.warning(f"Chat request rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat model is not configured",
        ) from e


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


@router.post("/api/chat", response_model=RelayChatResponse)
async def relay_chat(
    request: RelayChatRequest,
    service: AgentService = Depends(require_agent_service),
) -> RelayChatResponse:
    """Answer a chat message in one piece.

    Raises:
        422: Empty or missing message.
        502: The model call failed.
        503: Chat model is not configured.
    """
    session_id = request.session_id or str(uuid.uuid4())

    try:
        reply = await service.get_response(request.message, session_id=session_id)
    except ChatStreamError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Chat model request failed",
        ) from e

    return RelayChatResponse(reply=reply, session_id=session_id)


@router.post("/chat/stream")
async def stream_chat(
    request: RelayChatRequest,
    service: AgentService = Depends(require_agent_service),
) -> StreamingResponse:
    """Stream a chat reply as Server-Sent Events.

    Emits a ``generating`` status chunk, one chunk per fragment, then a
    final chunk with ``done=true`` (status ``complete`` or ``error``).
    """
    session_id = request.session_id or str(uuid.uuid4())

    async def event_stream() -> AsyncGenerator[str]:
        yield _sse(StreamChunk(content="", done=False, status=StreamStatus.GENERATING))
        try:
            async for fragment in service.stream_response(request.message, session_id):
                yield _sse(StreamChunk(content=fragment, done=False))
        except ChatStreamError as e:
            yield _sse(
                StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e))
            )
            return
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Session-Id": session_id},
    )
