"""Fingerprints and cache keys for documents and addresses."""

import hashlib


def compute_hash(content: str | bytes) -> str:
    """
    Compute SHA-256 hash of content.

    Used as the fingerprint of a fetched source document, so an unchanged
    page can reuse a previous extraction.

    Args:
        content: String or bytes content to hash

    Returns:
        Hexadecimal hash string (64 characters)

    Examples:
        >>> compute_hash("Hello, World!")
        'dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f'
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    return hashlib.sha256(content).hexdigest()


def normalize_address(address: str) -> str:
    """
    Normalize an address for use as a geocode cache key.

    Collapses runs of whitespace and case-folds, so "Street 1  12345 City"
    and "street 1 12345 city" share one lookup.

    Examples:
        >>> normalize_address("  Mönckebergstraße 1\\n 20095  Hamburg ")
        'mönckebergstraße 1 20095 hamburg'
    """
    return " ".join(address.split()).casefold()
