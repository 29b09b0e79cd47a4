"""Async download of the source document."""

import logging

import httpx

from hamvaxmap.core.errors import NetworkError

logger = logging.getLogger(__name__)


async def fetch_document(client: httpx.AsyncClient, url: str) -> str:
    """
    Fetch the source document with a single GET request.

    There is no retry and no caching: every call hits the server.

    Args:
        client: Shared async HTTP client
        url: Document URL

    Returns:
        Document body as text

    Raises:
        NetworkError: On a non-2xx status or any transport failure
    """
    logger.info(f"Fetching {url}")

    try:
        response = await client.get(url)
        response.raise_for_status()

    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise NetworkError(
            f"Fetching {url} returned HTTP {status}",
            url=url,
            status_code=status,
        ) from e

    except httpx.RequestError as e:
        raise NetworkError(f"Request error for {url}: {e}", url=url) from e

    logger.debug(f"Fetched {len(response.text)} characters from {url}")
    return response.text
