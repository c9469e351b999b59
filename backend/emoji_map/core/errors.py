"""
Exception hierarchy for the places pipeline.

Lower layers raise these; the handlers registered in ``emoji_map.main`` turn
them into ``{"error": ...}`` responses with the matching status code.
"""


class PlacesError(Exception):
    """Base class for every error the service raises on purpose."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PlacesError):
    status_code = 400


class MissingParameterError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"Missing required parameter: {field}")
        self.field = field


class InvalidParameterError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"Invalid parameter: {field}")
        self.field = field


class NotFoundError(PlacesError):
    status_code = 404


class UpstreamError(PlacesError):
    """
    The Places API failed or answered with something unusable.

    ``message`` is the public text returned to the client; ``detail`` is only
    logged.
    """
    status_code = 500

    def __init__(self, message: str, detail: str | None = None, status: int | None = None):
        super().__init__(message)
        self.detail = detail
        self.status = status
