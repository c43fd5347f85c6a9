"""Authenticated HTTP clients and resilience helpers for serverless actions.

Provides:
- Pluggable authentication strategies (shared secret, request signing, delegated token)
- A resilient HTTP client that normalizes every outcome into one result shape
- HAL pagination over hypermedia "next" links
- Error normalization into a typed ApiError
- A fingerprint-based loop breaker for event-driven actions
"""

__version__ = "0.4.0"
