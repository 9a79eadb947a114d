"""Chat session state and message rendering.

UI-independent core of the chat widget: the transcript, the send cycle with
streamed fragments, and conversion of messages to display HTML.
"""

from storefront.chat.controller import (
    APOLOGY,
    GREETING,
    MISSING_CREDENTIAL_MESSAGE,
    ChatController,
    ChatState,
    ChatView,
)
from storefront.chat.rendering import escape_text, markdown_to_html, render_message

__all__ = [
    "APOLOGY",
    "GREETING",
    "MISSING_CREDENTIAL_MESSAGE",
    "ChatController",
    "ChatState",
    "ChatView",
    "escape_text",
    "markdown_to_html",
    "render_message",
]
