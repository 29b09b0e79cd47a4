"""HamVaxMap: vaccination practice locations scraped from the KVHH list and geocoded."""

__version__ = "0.1.0"
