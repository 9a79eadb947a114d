"""Pytest fixtures and shared test configuration.

Provides reusable fakes and fixtures for unit and integration tests.

Fixtures:
    - view: Recording ChatView for controller tests
    - make_client: Factory for scripted chat clients
    - sample_products: Catalog payload as the backend returns it
    - async_client: HTTPX client for API testing with a fake agent service
    - mock_session_id: Consistent session ID for tests
"""

import asyncio
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.api import app
from storefront.api.routes import require_agent_service
from storefront.models.schemas import ChatMessage


class RecordingView:
    """ChatView that records every call the controller makes."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []
        self.busy = False
        self.disabled = False
        self.input_cleared = 0

    def show_message(self, message: ChatMessage) -> None:
        self.events.append(("show", message.id))

    def update_message(self, message: ChatMessage) -> None:
        self.events.append(("update", message.id))

    def set_busy(self, busy: bool) -> None:
        self.events.append(("busy", busy))
        self.busy = busy

    def disable_input(self) -> None:
        self.events.append(("disable", None))
        self.disabled = True

    def clear_input(self) -> None:
        self.events.append(("clear", None))
        self.input_cleared += 1

    def scroll_to_latest(self) -> None:
        self.events.append(("scroll", None))

    @property
    def busy_changes(self) -> list[bool]:
        return [value for kind, value in self.events if kind == "busy"]

    def every_mutation_scrolled(self) -> bool:
        """True if each show/update is immediately followed by a scroll."""
        for index, (kind, _) in enumerate(self.events):
            if kind not in ("show", "update"):
                continue
            if index + 1 >= len(self.events) or self.events[index + 1][0] != "scroll":
                return False
        return True


class FakeChatClient:
    """Scripted chat client.

    Yields ``fragments`` in order, calling ``after_fragment(i)`` once the
    consumer asks for the item after fragment ``i``. Then optionally hangs
    forever or raises ``error``.
    """

    def __init__(
        self,
        fragments: tuple[str, ...] = (),
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
        hang: bool = False,
        after_fragment: Callable[[int], None] | None = None,
    ) -> None:
        self.fragments = fragments
        self.error = error
        self.gate = gate
        self.hang = hang
        self.after_fragment = after_fragment
        self.calls: list[tuple[str, str]] = []
        self.started = asyncio.Event()
        self.waiting = asyncio.Event()

    async def stream_response(self, message: str, session_id: str) -> AsyncGenerator[str]:
        self.calls.append((message, session_id))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        for index, fragment in enumerate(self.fragments):
            yield fragment
            if self.after_fragment is not None:
                self.after_fragment(index)
        if self.hang:
            self.waiting.set()
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error

    async def get_response(self, message: str, session_id: str) -> str:
        self.calls.append((message, session_id))
        if self.error is not None:
            raise self.error
        return "".join(self.fragments)


@pytest.fixture
def view() -> RecordingView:
    """Return a fresh recording view."""
    return RecordingView()


@pytest.fixture
def make_client() -> type[FakeChatClient]:
    """Return the scripted client class for building per-test clients."""
    return FakeChatClient


@pytest.fixture
def mock_session_id() -> str:
    """Generate consistent session ID for testing.

    Returns:
        Predictable session ID for test assertions.
    """
    return "test-session-12345"


@pytest.fixture
def sample_products() -> list[dict[str, Any]]:
    """Product list as the backend serves it."""
    return [
        {
            "id": 1,
            "name": "Trail Backpack",
            "description": "30L water-resistant pack",
            "price": "79.90",
            "image_url": "https://cdn.example.com/backpack.jpg",
        },
        {
            "id": 2,
            "name": "Steel Bottle",
            "description": "Keeps drinks cold for 24h",
            "price": 19.5,
            "image_url": "https://cdn.example.com/bottle.jpg",
        },
        {
            "id": 3,
            "name": "Camp Mug",
            "description": "Enamel, 350ml",
            "price": 0,
            "image_url": "https://cdn.example.com/mug.jpg",
        },
    ]


@pytest.fixture
def fake_agent_service() -> FakeChatClient:
    """Agent service stand-in answering with three fragments."""
    return FakeChatClient(fragments=("You can ", "return items ", "within 30 days."))


@pytest.fixture
async def async_client(fake_agent_service: FakeChatClient) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient whose chat routes use the fake agent service.
    """
    app.dependency_overrides[require_agent_service] = lambda: fake_agent_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
