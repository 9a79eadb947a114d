"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - agent/: Chat configuration, agent service and relay client
    - catalog/: Product list fetch and tiles
    - chat/: Session controller and message rendering

Uses fakes for external services. Follows single responsibility
per test function. Leverages pytest-check for multiple assertions per test.
"""
