"""
Apify integration for actor input-schema resolution.

Provides:
- ApifyClient: read-only HTTP client for the Apify API v2 actor registry
- ApifyError: raised on transport failures and non-success responses
"""

from actorschema.integrations.apify.client import (
    ApifyClient,
    ApifyError,
)

__all__ = [
    "ApifyClient",
    "ApifyError",
]
