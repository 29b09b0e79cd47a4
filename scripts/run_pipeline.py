"""Run the location pipeline with command-line overrides."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from hamvaxmap.config.settings import get_settings, load_source_config
from hamvaxmap.core.errors import PipelineError
from hamvaxmap.core.pipeline import Pipeline, export


async def main() -> int:
    """Run the pipeline."""
    parser = argparse.ArgumentParser(description="Fetch, extract and geocode practice addresses")
    parser.add_argument(
        "--source",
        help="Source to read (default: from settings)",
        choices=sorted(load_source_config()["sources"]),
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Output directory (default: data/runs/latest)",
    )
    parser.add_argument(
        "--failure-policy",
        choices=["fail_fast", "isolate"],
        help="What a failed geocode lookup does to the batch",
    )
    parser.add_argument(
        "--max-concurrent",
        type=int,
        help="Maximum geocode lookups in flight at once",
    )

    args = parser.parse_args()

    overrides = {}
    if args.failure_policy:
        overrides["failure_policy"] = args.failure_policy
    if args.max_concurrent is not None:
        overrides["max_concurrent_lookups"] = args.max_concurrent

    try:
        settings = get_settings().with_overrides(**overrides)
    except ValidationError as e:
        parser.error(str(e))
    output_dir = args.output_dir or settings.data_dir / "latest"

    print("Starting pipeline...")
    pipeline = Pipeline(settings=settings, source=args.source, output_dir=output_dir)

    try:
        result = await pipeline.run()
    except PipelineError as e:
        print(f"\n✗ Pipeline failed [{e.error_code}]: {e}")
        return 1

    output_path = export(result, output_dir / "addresses.json")

    print("\n✓ Pipeline complete!")
    print(f"  Extracted: {result.stats['records_extracted']}")
    print(f"  Geocoded: {result.stats['records_resolved']}")
    print(f"  Output: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
