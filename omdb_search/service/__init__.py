"""Search service package.

Layout:
- ``api``: the ``/search`` HTTP endpoint.
- ``main``: application factory, lifespan, and CLI entry point.
- ``site``: static front end served at ``/``.
"""
