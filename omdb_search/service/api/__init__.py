"""API subpackage for the search service.

The router exposes ``/search``. The transport layer stays thin and delegates
to the ``SearchBackend`` held on application state.
"""
