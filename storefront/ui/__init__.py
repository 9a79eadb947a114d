"""NiceGUI interface - thin visualization layer for the storefront.

Responsibilities:
    - Product grid loaded once per page visit
    - Floating chat widget with streaming replies
    - Busy indicator and inert input when chat is not configured

Contains minimal business logic. Delegates catalog fetching and chat state
to the catalog and chat packages.
"""
