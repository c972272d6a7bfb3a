"""
Error types raised by the staging services.

The router turns these into HTTP responses. Upstream SDK errors
(google.genai.errors.APIError) are not wrapped; they propagate as-is.
"""


class StagingError(Exception):
    """Base class for staging errors.

    Attributes:
        code: machine readable error code, e.g. "INVALID_IMAGE"
        message: message safe to show to the caller
        http_status: status code to use at the HTTP boundary
    """

    code = "STAGING_ERROR"
    http_status = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(StagingError):
    """Required configuration (e.g. the Gemini API key) is missing or invalid."""

    code = "CONFIGURATION_ERROR"


class InvalidImageError(StagingError):
    """Inbound image is missing or not a base64 data URL."""

    code = "INVALID_IMAGE"
    http_status = 400


class ImageGenerationError(StagingError):
    """The model answered but no image could be extracted from the response."""

    code = "IMAGE_GENERATION_FAILED"
