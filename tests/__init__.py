"""Test package for the Storefront Assistant.

Provides test coverage for all components with unit tests
for isolated logic and integration tests for the HTTP API.

Structure:
    - unit/: Individual function and class tests
    - integration/: API endpoint tests through the ASGI app

External services (product backend, hosted model) are always faked.
Leverages pytest with pytest-check for soft assertions.
"""
