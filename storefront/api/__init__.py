"""FastAPI endpoints for the storefront assistant.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Non-streaming chat relay
    - POST /chat/stream: Streaming chat reply (SSE)
"""

from storefront.api.app import app, create_app

__all__ = ["app", "create_app"]
