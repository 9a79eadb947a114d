"""Integration tests for the HTTP API working as a system.

Coverage:
    - Health endpoint
    - Non-streaming chat relay
    - SSE chat stream protocol and error reporting

Requests go through the real FastAPI app via ASGITransport; only the
agent service is replaced so no model credential is needed.
"""
