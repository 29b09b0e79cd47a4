"""Utility functions for logging, hashing and caching."""

from hamvaxmap.utils.cache import TTLCache
from hamvaxmap.utils.hash import compute_hash, normalize_address
from hamvaxmap.utils.logger import get_logger, log_event

__all__ = [
    "TTLCache",
    "compute_hash",
    "normalize_address",
    "get_logger",
    "log_event",
]
