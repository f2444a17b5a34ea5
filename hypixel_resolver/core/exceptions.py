"""
Hypixel Resolver Exceptions

Exception taxonomy for the resolver. Only construction faults and
infrastructure faults are raised; "not found", throttling and transport
failures are returned as FetchResponse values instead.
"""

from typing import Optional, Any, Dict


class ExceptionCodes:
    """Stable error codes carried by HypixelResolverException."""

    NO_KEY = "NO_KEY"
    INVALID_KEY = "INVALID_KEY"
    CACHE_STORE_ERROR = "CACHE_STORE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class HypixelResolverException(Exception):
    """Base exception for resolver errors.

    Never swallow these - always preserve context.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class NoApiKeyException(HypixelResolverException):
    """Raised when the client is constructed without an API key."""

    def __init__(self, message: str = "API Key can't be null!"):
        super().__init__(message=message, error_code=ExceptionCodes.NO_KEY)


class InvalidApiKeyException(HypixelResolverException):
    """Raised when the API key is not UUID-shaped."""

    def __init__(self, message: str = "API Key is invalid!"):
        super().__init__(message=message, error_code=ExceptionCodes.INVALID_KEY)


class CacheStoreException(HypixelResolverException):
    """Raised when the backing cache store fails to read or write."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(
            message=message,
            error_code=ExceptionCodes.CACHE_STORE_ERROR,
            details=details,
        )
        if original_error:
            self.__cause__ = original_error


class ConfigurationException(HypixelResolverException):
    """Raised when settings cannot produce a working collaborator."""

    def __init__(self, message: str, setting: Optional[str] = None):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message=message,
            error_code=ExceptionCodes.CONFIGURATION_ERROR,
            details=details,
        )
