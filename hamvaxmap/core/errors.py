"""Pipeline failures. Each one aborts the run and reaches the caller."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class NetworkError(PipelineError):
    """Raised when the source document cannot be fetched."""

    error_code = "NETWORK_ERROR"

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ExtractionError(PipelineError):
    """Raised when the source document yields no address records."""

    error_code = "EXTRACTION_ERROR"


class GeocodeError(PipelineError):
    """Raised when a geocode lookup fails."""

    error_code = "GEOCODE_ERROR"

    def __init__(self, message: str, address: str, status_code: int | None = None):
        super().__init__(message)
        self.address = address
        self.status_code = status_code
