"""Storefront Assistant - product catalog page with a streaming chat helper.

Combines FastAPI for HTTP streaming, Agno for model orchestration,
NiceGUI for the storefront page, and Pydantic for data validation.

Components:
    - api: chat relay endpoints and streaming responses
    - agent: hosted model clients (direct streaming or relay)
    - catalog: product list fetch and tile preparation
    - chat: chat session controller and message rendering
    - ui: storefront page with product grid and chat widget
    - models: request/response and domain schemas
"""

__version__ = "0.1.0"
