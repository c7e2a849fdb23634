# ABOUTME: Exception taxonomy for roadmap generation; each class carries its HTTP status.
# ABOUTME: api.main maps any RoadmapError to {error, details} with status_code; anything else is 500.


class RoadmapError(Exception):
    """Base error for the generation endpoint."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(RoadmapError):
    """A required server-side secret is missing."""

    status_code = 503


class InvalidRequestError(RoadmapError):
    """Caller sent a request missing a required header or body field."""

    status_code = 400


class UpstreamError(RoadmapError):
    """Gemini failed, returned an unexpected shape, or produced an invalid roadmap."""

    status_code = 500


class StorageConfigurationError(RoadmapError):
    status_code = 500
