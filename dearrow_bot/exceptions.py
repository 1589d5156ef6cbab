"""
Custom exceptions for the de-clickbait bot, providing a structured error hierarchy.
"""


class BotBaseException(Exception):
    """Base exception for all custom exceptions in this bot."""

    pass


class ConfigurationError(BotBaseException):
    """Raised for errors in bot configuration, like missing keys or invalid values."""

    pass


class APIError(BotBaseException):
    """Raised for errors related to DeArrow API interactions."""

    def __init__(self, message: str, video_id: str | None = None):
        super().__init__(message)
        self.video_id = video_id


class BrandingFetchError(APIError):
    """Raised when branding metadata cannot be fetched or decoded."""

    pass


class ThumbnailFetchError(APIError):
    """Raised when a thumbnail image cannot be fetched."""

    pass
