"""docplane - TTL resource cache and chunked content addressing for agents."""

__version__ = "0.1.0"
