"""Pipeline orchestrator: fetch, extract, geocode and filter address records."""

import json
import logging
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from hamvaxmap.config.settings import Settings, get_settings, load_source_config
from hamvaxmap.core.errors import PipelineError
from hamvaxmap.core.extractor import Extractor
from hamvaxmap.core.fetcher import fetch_document
from hamvaxmap.core.filter import select_resolved
from hamvaxmap.core.geocoder import Geocoder
from hamvaxmap.core.models import AddressRecord, PipelineResult, Resource
from hamvaxmap.decoders import get_decoder
from hamvaxmap.utils.cache import TTLCache
from hamvaxmap.utils.hash import compute_hash
from hamvaxmap.utils.logger import get_logger, log_event

logger = get_logger(__name__)


class Pipeline:
    """
    Pipeline that builds the map's data set from the source page.

    Workflow:
    1. Fetch the source document
    2. Extract address records with the source's row decoder
    3. Geocode every record concurrently
    4. Keep only records with coordinates

    A Pipeline instance can be run repeatedly (once per page request); its
    caches, when enabled, live as long as the instance.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        source: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        output_dir: Path | None = None,
    ):
        """
        Initialize pipeline.

        Args:
            settings: Settings to use (defaults to cached environment settings)
            source: Source key in sources.yaml (defaults to settings.source)
            transport: Optional httpx transport, used for tests
            output_dir: Optional run directory for JSONL logs
        """
        self.settings = settings or get_settings()
        self.source = source or self.settings.source

        sources = load_source_config()["sources"]
        if self.source not in sources:
            raise ValueError(f"Unknown source {self.source!r}; known: {sorted(sources)}")
        self.source_config = sources[self.source]

        self.url = self.source_config["url"]
        self.resources = [Resource(**entry) for entry in self.source_config.get("resources", [])]
        self.extractor = Extractor(get_decoder(self.source_config["decoder"]))
        self.transport = transport

        # Caches (disabled when cache_ttl_seconds is 0)
        self.extraction_cache = TTLCache(self.settings.cache_ttl_seconds)
        self.geocode_cache = TTLCache(self.settings.cache_ttl_seconds)

        self.output_dir = output_dir
        if output_dir:
            log_file = Path(output_dir) / "logs" / "pipeline.jsonl"
            # One logger per run directory, so each run writes its own file
            run_key = compute_hash(str(Path(output_dir).resolve()))[:12]
            self.logger = get_logger(f"pipeline.{run_key}", log_file, self.settings.log_level)
        else:
            self.logger = logger

        self.stats: dict[str, Any] = {}

    def _reset_stats(self) -> None:
        self.stats = {
            "source": self.source,
            "records_extracted": 0,
            "records_resolved": 0,
            "records_unresolved": 0,
            "lookup_failures": 0,
            "geocode_lookups": 0,
            "geocode_cache_hits": 0,
            "extraction_cached": False,
            "start_time": None,
            "end_time": None,
        }

    async def run(self) -> PipelineResult:
        """
        Run the pipeline once.

        Returns:
            Attribution resources and the geocoded records

        Raises:
            NetworkError: If the source document cannot be fetched
            ExtractionError: If the document holds no records
            GeocodeError: If a lookup fails under the fail_fast policy
        """
        self._reset_stats()
        self.stats["start_time"] = datetime.now().isoformat()
        log_event(self.logger, "pipeline_start", f"Starting pipeline for {self.source}", url=self.url)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                document = await fetch_document(client, self.url)
                records = self._extract(document)

                geocoder = Geocoder(
                    client,
                    api_key=self.settings.geocode_api_key,
                    endpoint=self.settings.geocode_endpoint,
                    max_concurrent=self.settings.max_concurrent_lookups,
                    delay=self.settings.geocode_delay_seconds,
                    failure_policy=self.settings.failure_policy,
                    cache=self.geocode_cache,
                    show_progress=self.settings.show_progress,
                )
                try:
                    enriched = await geocoder.enrich(records)
                finally:
                    self.stats["lookup_failures"] = geocoder.stats["failures"]
                    self.stats["geocode_lookups"] = geocoder.stats["lookups"]
                    self.stats["geocode_cache_hits"] = geocoder.stats["cache_hits"]

        except PipelineError as e:
            self.stats["end_time"] = datetime.now().isoformat()
            log_event(
                self.logger,
                "pipeline_failed",
                f"Pipeline failed: {e}",
                level=logging.ERROR,
                error_code=e.error_code,
                **self.stats,
            )
            raise

        resolved = select_resolved(enriched)

        self.stats["records_resolved"] = len(resolved)
        self.stats["records_unresolved"] = len(enriched) - len(resolved)
        self.stats["end_time"] = datetime.now().isoformat()
        log_event(self.logger, "pipeline_complete", f"Pipeline complete. Stats: {self.stats}", **self.stats)

        return PipelineResult(resources=self.resources, records=resolved, stats=dict(self.stats))

    def _extract(self, document: str) -> list[AddressRecord]:
        """Extract records, reusing a cached extraction of an identical document."""
        fingerprint = compute_hash(document)

        records = self.extraction_cache.get(fingerprint)
        if records is not None:
            self.stats["extraction_cached"] = True
            self.logger.info(f"Reusing extraction for document {fingerprint[:16]}")
        else:
            records = self.extractor.extract(document)
            self.extraction_cache.set(fingerprint, records)

        self.stats["records_extracted"] = len(records)
        return list(records)


def export(result: PipelineResult, path: Path) -> Path:
    """
    Write a pipeline result as JSON for the display layer.

    Args:
        result: Result of Pipeline.run()
        path: Output file path

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    logger.info(f"Wrote {len(result.records)} addresses to {path}")
    return path


@lru_cache
def get_pipeline() -> Pipeline:
    """Get the shared pipeline instance, whose caches persist across requests."""
    return Pipeline()


async def load_addresses(pipeline: Pipeline | None = None) -> dict[str, Any]:
    """
    Run the pipeline for one page request and return the display payload.

    Args:
        pipeline: Pipeline to run (defaults to the shared instance)
    """
    pipeline = pipeline or get_pipeline()
    result = await pipeline.run()
    return result.to_dict()
