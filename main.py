"""Main pipeline script: Fetch, extract and geocode the KVHH practice list.

Just run: uv run python main.py
(Needs GEOCODE_API_KEY in the environment or in .env)
"""

import asyncio
from datetime import datetime

from hamvaxmap.config.settings import get_settings
from hamvaxmap.core.pipeline import Pipeline, export


async def main():
    """Run the pipeline once and write the map data set to the data directory."""
    print("=" * 80)
    print("HamVaxMap - Location Pipeline")
    print("=" * 80)

    settings = get_settings()
    date_stamp = datetime.now().strftime("%Y_%m_%d")
    run_dir = settings.data_dir / date_stamp

    pipeline = Pipeline(settings=settings, output_dir=run_dir)
    result = await pipeline.run()
    output_path = export(result, run_dir / "addresses.json")

    stats = result.stats
    print("\n✓ Pipeline complete!")
    print(f"  • Records extracted: {stats['records_extracted']}")
    print(f"  • Records geocoded: {stats['records_resolved']}")
    print(f"  • Records without location: {stats['records_unresolved']}")
    print(f"  • Lookup failures: {stats['lookup_failures']}")
    print(f"\nOutput: {output_path}")


if __name__ == "__main__":
    asyncio.run(main())
