# /wrestling_bot/errors.py
from typing import Any, Optional


class ValidationError(Exception):
    """Request is missing a required field. Raised before anything is persisted."""


class ConfigurationError(RuntimeError):
    """Required configuration is absent; the server must not start."""


class UpstreamError(Exception):
    """
    The completion service could not produce a reply.
    - status_code: upstream HTTP status, None for network failures
    - details: upstream response body (JSON if it parsed) or the error message
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details if details is not None else message
