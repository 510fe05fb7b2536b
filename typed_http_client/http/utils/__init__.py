"""Utility functions for HTTP client operations.

This package contains helpers used by the request executor and session adapters:
- Response validation and status code descriptions
- Response header normalisation
- API key handling for diagnostics
"""
