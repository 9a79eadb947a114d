"""Chat session controller.

Owns the transcript of one chat widget and drives a single send cycle:

    idle -> sending -> streaming -> idle

with failures, timeouts and cancellation also returning to idle after the
apology policy has run. The controller knows nothing about NiceGUI; it talks
to its view through the small ChatView protocol.

Fragments are applied to the message that currently holds the placeholder's
id, looked up on every append, never to "the last message".
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import Protocol

from storefront.agent.clients import ChatClient
from storefront.models.schemas import ChatMessage, ChatRole

logger = logging.getLogger(__name__)

GREETING = "Hello! I'm your friendly product assistant. How can I help you today?"
MISSING_CREDENTIAL_MESSAGE = "Error: API key is not configured."
APOLOGY = "Sorry, something went wrong. Please try again."


class ChatState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    DISABLED = "disabled"


class ChatView(Protocol):
    """What the controller needs from the widget showing the transcript."""

    def show_message(self, message: ChatMessage) -> None: ...

    def update_message(self, message: ChatMessage) -> None: ...

    def set_busy(self, busy: bool) -> None: ...

    def disable_input(self) -> None: ...

    def clear_input(self) -> None: ...

    def scroll_to_latest(self) -> None: ...


class ChatController:
    """Mediates between a chat widget and a streaming chat client.

    The client is injected at construction. Passing None means the chat
    model is not configured: initialize() then shows an error message and
    the controller refuses every send.
    """

    def __init__(
        self,
        client: ChatClient | None,
        view: ChatView,
        *,
        session_id: str | None = None,
        stream_timeout: float | None = None,
    ) -> None:
        self._client = client
        self._view = view
        self.session_id = session_id or str(uuid.uuid4())
        self._stream_timeout = stream_timeout
        self._messages: list[ChatMessage] = []
        self._state = ChatState.IDLE if client is not None else ChatState.DISABLED
        self._initialized = False
        self._active_id: str | None = None
        self._task: asyncio.Task | None = None
        self._cancel_requested = False

    @property
    def transcript(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state in (ChatState.SENDING, ChatState.STREAMING)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    @property
    def active_message_id(self) -> str | None:
        """Id of the model message currently receiving fragments, if any."""
        return self._active_id

    def initialize(self) -> None:
        """Show the greeting, or the misconfiguration notice. Runs once."""
        if self._initialized:
            return
        self._initialized = True

        if self._client is None:
            self._append(ChatMessage(role=ChatRole.ERROR, text=MISSING_CREDENTIAL_MESSAGE))
            self._view.disable_input()
            return

        self._append(ChatMessage(role=ChatRole.MODEL, text=GREETING))

    async def send(self, text: str | None) -> bool:
        """Send a user message and stream the reply into the transcript.

        Args:
            text: Raw input text.

        Returns:
            True if a request was issued, False if the send was ignored.
        """
        message = (text or "").strip()
        if not message or self.busy or self._client is None:
            return False

        self._append(ChatMessage(role=ChatRole.USER, text=message))
        self._view.clear_input()
        self._set_state(ChatState.SENDING)

        placeholder = self._append(ChatMessage(role=ChatRole.MODEL, text=""))
        self._active_id = placeholder.id
        self._task = asyncio.current_task()

        try:
            async with asyncio.timeout(self._stream_timeout):
                async for fragment in self._client.stream_response(message, self.session_id):
                    if self._state is ChatState.SENDING:
                        self._set_state(ChatState.STREAMING)
                    if fragment:
                        self._append_fragment(placeholder.id, fragment)
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            self._task.uncancel()
            logger.info(f"Chat reply cancelled for session {self.session_id}")
            self._fail(placeholder.id)
        except Exception as e:
            logger.error(f"Chat reply failed for session {self.session_id}: {e!r}")
            self._fail(placeholder.id)
        finally:
            self._active_id = None
            self._task = None
            self._cancel_requested = False
            self._set_state(ChatState.IDLE)

        return True

    def cancel(self) -> bool:
        """Stop the in-flight reply, if there is one.

        Returns:
            True if a running send was cancelled.
        """
        if self._task is None or not self.busy or self._cancel_requested:
            return False
        self._cancel_requested = True
        self._task.cancel()
        return True

    def _set_state(self, state: ChatState) -> None:
        was_busy = self.busy
        self._state = state
        if self.busy != was_busy:
            self._view.set_busy(self.busy)

    def _index_of(self, message_id: str) -> int | None:
        for index, message in enumerate(self._messages):
            if message.id == message_id:
                return index
        return None

    def _append(self, message: ChatMessage) -> ChatMessage:
        self._messages.append(message)
        self._view.show_message(message)
        self._view.scroll_to_latest()
        return message

    def _replace(self, index: int, text: str) -> None:
        updated = self._messages[index].model_copy(update={"text": text})
        self._messages[index] = updated
        self._view.update_message(updated)
        self._view.scroll_to_latest()

    def _append_fragment(self, message_id: str, fragment: str) -> None:
        index = self._index_of(message_id)
        if index is None:
            logger.warning(f"Dropping fragment for missing message {message_id}")
            return
        self._replace(index, self._messages[index].text + fragment)

    def _fail(self, message_id: str) -> None:
        """Leave exactly one terminal model message for the failed turn."""
        index = self._index_of(message_id)
        if index is None:
            self._append(ChatMessage(role=ChatRole.MODEL, text=APOLOGY))
            return

        partial = self._messages[index].text
        self._replace(index, f"{partial}\n\n{APOLOGY}" if partial else APOLOGY)
