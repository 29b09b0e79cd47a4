"""Data models passed between pipeline stages."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AddressRecord(BaseModel):
    """
    One location row from the source table.

    Created by the extractor, given coordinates by the geocoder (as a new
    instance), then kept or dropped by the filter. Records are frozen.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    raw_address: str = Field(default="", description="Single-line postal address")
    rich_address: str = Field(default="", description="Inner HTML of the address cell")
    hint: str = ""
    lat: float | None = None
    lng: float | None = None

    @model_validator(mode="after")
    def _coordinates_paired(self) -> "AddressRecord":
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be set together")
        return self

    @property
    def is_resolved(self) -> bool:
        return self.lat is not None and self.lng is not None

    def with_coordinates(self, lat: float, lng: float) -> "AddressRecord":
        """Return a copy of this record located at (lat, lng)."""
        return AddressRecord.model_validate({**self.model_dump(), "lat": lat, "lng": lng})

    def to_display(self) -> dict[str, Any]:
        """Shape consumed by the map layer: rich markup under ``address``."""
        return {
            "name": self.name,
            "address": self.rich_address,
            "hint": self.hint,
            "lat": self.lat,
            "lng": self.lng,
        }


class Resource(BaseModel):
    """Attribution link for a source document."""

    name: str
    url: str


class PipelineResult(BaseModel):
    """Output of one pipeline run."""

    resources: list[Resource] = Field(default_factory=list)
    records: list[AddressRecord] = Field(default_factory=list)
    stats: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload for the display layer."""
        return {
            "resources": [resource.model_dump() for resource in self.resources],
            "addresses": [record.to_display() for record in self.records],
        }
