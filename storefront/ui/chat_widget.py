"""Floating chat widget rendered with NiceGUI.

Implements the ChatView protocol so the chat controller can drive it.
"""

from collections.abc import Awaitable, Callable

from nicegui import ui

from storefront.chat.rendering import render_message
from storefront.models.schemas import ChatMessage, ChatRole

_BUBBLE_CLASSES = {
    ChatRole.USER: "message-user self-end",
    ChatRole.MODEL: "message-model self-start",
    ChatRole.ERROR: "message-error self-start",
}


class ChatWidget:
    """Fixed-position chat panel: history pane, input, send/stop buttons and spinner."""

    def __init__(
        self,
        on_send: Callable[[], Awaitable[None]],
        on_cancel: Callable[[], None],
    ) -> None:
        self._bubbles: dict[str, ui.html] = {}
        self._inert = False

        with ui.card().classes("chat-widget fixed bottom-5 right-5 w-80 p-0 gap-0"):
            with ui.row().classes("w-full header px-4 py-2 items-center gap-2"):
                ui.icon("smart_toy").classes("text-white text-xl")
                ui.label("Product Assistant").classes("text-sm font-semibold text-white")

            self._scroll = ui.scroll_area().classes("w-full h-72 bg-gray-50")
            with self._scroll:
                self._history = ui.column().classes("w-full p-2 gap-2")

            self._spinner = ui.spinner("dots", size="md").classes("self-center")
            self._spinner.set_visibility(False)

            with ui.row().classes("w-full p-2 gap-2 items-center no-wrap border-t"):
                self._input = (
                    ui.input(placeholder="Ask about products...")
                    .props("rounded outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", on_send)
                )
                self._send_btn = (
                    ui.button("Send", on_click=on_send)
                    .props("rounded unelevated no-caps")
                    .classes("send-btn")
                )
                self._stop_btn = ui.button(icon="stop", on_click=on_cancel).props(
                    "round flat dense color=grey-7"
                )
                self._stop_btn.set_visibility(False)

    @property
    def input_value(self) -> str:
        return self._input.value or ""

    def show_message(self, message: ChatMessage) -> None:
        with self._history:
            with ui.column().classes(f"max-w-[80%] gap-0 {_BUBBLE_CLASSES[message.role]}"):
                bubble = ui.html(render_message(message), sanitize=False).classes(
                    "px-3 py-2 text-sm leading-relaxed"
                )
                ui.label(message.time_label).classes("text-[10px] text-gray-400 px-2")
        self._bubbles[message.id] = bubble

    def update_message(self, message: ChatMessage) -> None:
        bubble = self._bubbles.get(message.id)
        if bubble is not None:
            bubble.set_content(render_message(message))

    def set_busy(self, busy: bool) -> None:
        if self._inert:
            return
        self._input.set_enabled(not busy)
        self._send_btn.set_enabled(not busy)
        self._spinner.set_visibility(busy)
        self._stop_btn.set_visibility(busy)
        if not busy:
            self._input.run_method("focus")

    def disable_input(self) -> None:
        self._inert = True
        self._input.disable()
        self._send_btn.disable()
        self._spinner.set_visibility(False)
        self._stop_btn.set_visibility(False)

    def clear_input(self) -> None:
        self._input.set_value("")

    def scroll_to_latest(self) -> None:
        self._scroll.scroll_to(percent=1.0)
