"""Geocoder module for adding coordinates to address records."""

import asyncio
import logging
import math
from typing import Any, Literal

import httpx
from tqdm import tqdm

from hamvaxmap.core.errors import GeocodeError
from hamvaxmap.core.models import AddressRecord
from hamvaxmap.utils.cache import TTLCache
from hamvaxmap.utils.hash import normalize_address
from hamvaxmap.utils.logger import get_logger, log_event

logger = get_logger(__name__)

FailurePolicy = Literal["fail_fast", "isolate"]

# Marks a cache miss; None is a cached "no location" answer
_MISS = object()


def parse_location(payload: Any) -> tuple[float, float] | None:
    """
    Read the first candidate's coordinates from a geocoding response.

    Expects ``{"results": [{"geometry": {"location": {"lat": .., "lng": ..}}}]}``.

    Returns:
        (lat, lng), or None if the payload carries no usable location
    """
    if not isinstance(payload, dict):
        return None

    results = payload.get("results")
    if not isinstance(results, list) or not results:
        return None

    first = results[0]
    if not isinstance(first, dict):
        return None

    geometry = first.get("geometry")
    if not isinstance(geometry, dict):
        return None

    location = geometry.get("location")
    if not isinstance(location, dict):
        return None

    lat, lng = location.get("lat"), location.get("lng")

    # bool is an int subclass but never a coordinate
    for value in (lat, lng):
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return None
        if not math.isfinite(value):
            return None

    return float(lat), float(lng)


class Geocoder:
    """
    Geocoder that resolves record addresses concurrently.

    Workflow:
    1. Schedule one lookup per record (bounded by a semaphore)
    2. Wait until every lookup has finished
    3. Attach coordinates from the first candidate of each response
    4. Apply the failure policy to lookups that errored

    Output order always matches input order.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        endpoint: str,
        max_concurrent: int = 10,
        delay: float = 0.0,
        failure_policy: FailurePolicy = "fail_fast",
        cache: TTLCache | None = None,
        show_progress: bool = False,
    ):
        """
        Initialize geocoder.

        Args:
            client: Shared async HTTP client
            api_key: Geocoding API credential
            endpoint: Geocoding endpoint URL
            max_concurrent: Maximum lookups in flight at once
            delay: Pause after each lookup, holding its slot (rate limiting)
            failure_policy: "fail_fast" aborts the batch on any failed lookup,
                "isolate" leaves the failed record unresolved
            cache: Optional cache of results keyed by normalized address
            show_progress: Show a tqdm progress bar
        """
        if failure_policy not in ("fail_fast", "isolate"):
            raise ValueError(f"Unknown failure policy: {failure_policy!r}")

        self.client = client
        self.api_key = api_key
        self.endpoint = endpoint
        self.max_concurrent = max_concurrent
        self.delay = delay
        self.failure_policy = failure_policy
        self.cache = cache
        self.show_progress = show_progress

        self.stats: dict[str, int] = {}
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.stats = {
            "lookups": 0,
            "cache_hits": 0,
            "resolved": 0,
            "unresolved": 0,
            "failures": 0,
        }

    async def enrich(self, records: list[AddressRecord]) -> list[AddressRecord]:
        """
        Resolve coordinates for every record.

        Args:
            records: Records to enrich

        Returns:
            Records in input order, with coordinates where resolvable

        Raises:
            GeocodeError: Under "fail_fast", the first failed lookup in input
                order, raised only after all lookups have finished
        """
        self._reset_stats()
        if not records:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def enrich_one(record: AddressRecord) -> AddressRecord:
            async with semaphore:
                try:
                    return await self._resolve(record)
                finally:
                    if self.delay:
                        await asyncio.sleep(self.delay)

        tasks = [asyncio.create_task(enrich_one(record)) for record in records]

        with tqdm(
            total=len(tasks),
            desc="Geocoding",
            disable=not self.show_progress,
        ) as progress:
            for task in tasks:
                task.add_done_callback(lambda _: progress.update())
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        enriched: list[AddressRecord] = []
        first_failure: GeocodeError | None = None

        for record, outcome in zip(records, outcomes):
            if isinstance(outcome, GeocodeError):
                self.stats["failures"] += 1
                log_event(
                    logger,
                    "geocode_failed",
                    f"Geocoding failed for {record.raw_address!r}: {outcome}",
                    level=logging.WARNING,
                    address=outcome.address,
                    status_code=outcome.status_code,
                )
                if first_failure is None:
                    first_failure = outcome
                enriched.append(record)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                enriched.append(outcome)

        if first_failure is not None and self.failure_policy == "fail_fast":
            raise first_failure

        self.stats["resolved"] = sum(1 for record in enriched if record.is_resolved)
        self.stats["unresolved"] = len(enriched) - self.stats["resolved"]

        logger.info(
            f"Geocoded {len(records)} records: {self.stats['resolved']} resolved, "
            f"{self.stats['unresolved']} unresolved, {self.stats['failures']} failed"
        )
        return enriched

    async def _resolve(self, record: AddressRecord) -> AddressRecord:
        """Look up one record, consulting the cache first."""
        key = normalize_address(record.raw_address)

        coordinates: Any = _MISS
        if self.cache is not None:
            coordinates = self.cache.get(key, _MISS)

        if coordinates is _MISS:
            coordinates = await self.lookup(record.raw_address)
            if self.cache is not None:
                self.cache.set(key, coordinates)
        else:
            self.stats["cache_hits"] += 1

        if coordinates is None:
            return record

        lat, lng = coordinates
        return record.with_coordinates(lat, lng)

    async def lookup(self, address: str) -> tuple[float, float] | None:
        """
        Query the geocoding endpoint for one address.

        Args:
            address: Single-line address (URL-escaped by the client)

        Returns:
            (lat, lng) of the first candidate, or None if there is none

        Raises:
            GeocodeError: On a non-2xx status or a transport failure
        """
        self.stats["lookups"] += 1

        try:
            response = await self.client.get(
                self.endpoint,
                params={"address": address, "key": self.api_key},
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GeocodeError(
                f"Could not fetch location data for {address!r}: HTTP {status}",
                address=address,
                status_code=status,
            ) from e

        except httpx.RequestError as e:
            raise GeocodeError(
                f"Could not fetch location data for {address!r}: {e}",
                address=address,
            ) from e

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"Geocoding response for {address!r} is not JSON")
            return None

        location = parse_location(payload)
        if location is None:
            status = payload.get("status") if isinstance(payload, dict) else None
            detail = payload.get("error_message") if isinstance(payload, dict) else None
            logger.debug(f"No location for {address!r} (status={status}, error={detail})")

        return location
