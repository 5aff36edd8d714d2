"""Tests for the OMDb search service.

Remote calls are served by ``httpx.MockTransport`` stubs, so no test needs
network access or a real OMDb API key.
"""
