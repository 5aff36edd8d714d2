"""OMDb search proxy.

Subpackages:
- ``omdb_search.common``: configuration, logging, and metrics.
- ``omdb_search.remote``: the remote search backend interface and the OMDb
  client that implements it.
- ``omdb_search.service``: the FastAPI application, ``/search`` endpoint, and
  static front end.
"""

__version__ = "0.1.0"
