"""Network access: HTTP client, fetch cache and extension prober."""

from .cache import FetchCache, MemoryResponseStore, ResponseStore, request_key
from .client import CachedResponse, HttpClient
from .prober import ENDING_VARIANTS, ExtensionProber, ProbeResult

__all__ = [
    "CachedResponse",
    "ENDING_VARIANTS",
    "ExtensionProber",
    "FetchCache",
    "HttpClient",
    "MemoryResponseStore",
    "ProbeResult",
    "ResponseStore",
    "request_key",
]
