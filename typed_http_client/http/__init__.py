"""Typed HTTP client module.

This module executes prepared HTTP requests and decodes their bodies into
caller-specified types. It contains:
- The request executor and its error classification
- Session adapters for aiohttp and requests
- A pydantic-backed JSON decoder
- Delivery contexts controlling where outcomes are handed to subscribers
"""
