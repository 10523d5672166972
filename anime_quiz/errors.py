from typing import Optional


class ConfigurationError(Exception):
    """Required settings are absent."""


class QuizAPIError(Exception):
    """
    Raised by QuizAPI for every failed call.

    Covers both an error status from the quiz service and a transport
    failure; in the latter case the aiohttp exception is the __cause__.
    """

    def __init__(self, message: str, endpoint: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.status = status
