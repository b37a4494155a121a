"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints and implementation details shared by the cache,
the address grammar and the delivery helpers.

For configurable values, see models.py (CacheConfig, DeliveryConfig, etc.).
"""

# =============================================================================
# Response Budget
# =============================================================================
# Character budget for payloads returned in full to the agent. Anything over
# this is cut and carries a truncation footer.

CHARACTER_LIMIT = 25_000
"""Default maximum characters for a full (non-deferred) response."""

DEFAULT_CHUNK_SIZE = 10_000
"""Default width of the chunk addresses advertised by summary-mode responses."""

# =============================================================================
# Resource Cache
# =============================================================================

CACHE_TTL_SEC = 30 * 60
"""Default lifetime of a cache entry (30 minutes)."""

CACHE_SWEEP_INTERVAL_SEC = 5 * 60
"""Default interval between background sweeps of expired entries."""

# =============================================================================
# Address Grammar
# =============================================================================

DEFAULT_SCHEME = "gdrive"
"""URI scheme used for resource addresses."""

SCHEME_PATTERN = r"[a-z][a-z0-9+.-]*"
"""Allowed characters for a configured scheme (RFC 3986, lowercased)."""
