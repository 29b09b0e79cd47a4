"""Core pipeline components.

Stage classes are imported from their modules (``hamvaxmap.core.pipeline``,
``hamvaxmap.core.geocoder``, ...); this package only re-exports the data
types and errors every stage shares.
"""

from hamvaxmap.core.errors import ExtractionError, GeocodeError, NetworkError, PipelineError
from hamvaxmap.core.models import AddressRecord, PipelineResult, Resource

__all__ = [
    "AddressRecord",
    "PipelineResult",
    "Resource",
    "PipelineError",
    "NetworkError",
    "ExtractionError",
    "GeocodeError",
]
