"""etfpulse core exception classes."""

from typing import Any


class EtfPulseError(Exception):
    """Base exception for etfpulse."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: human readable message
            error_code: machine readable error code
            details: extra context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidRequestError(EtfPulseError):
    """The caller supplied an unusable request (e.g. no fund codes)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "INVALID_REQUEST", details)


class ProviderError(EtfPulseError):
    """Upstream data source failure."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = "PROVIDER_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)
        self.provider_name = provider_name


class PrimaryFetchError(ProviderError):
    """The fundamentals page for a code could not be fetched.

    Fatal for the whole request.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        code: str | None = None,
        status_code: int | None = None,
        status_text: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if code is not None:
            super_details["code"] = code
        if status_code is not None:
            super_details["status_code"] = status_code
        if status_text:
            super_details["status_text"] = status_text
        super().__init__(message, provider_name, "UPSTREAM_ERROR", super_details)
        self.code = code
        self.status_code = status_code
        self.status_text = status_text


class SecondaryFetchError(ProviderError):
    """The realtime quote batch could not be fetched or decoded.

    Recovered locally by the overlay step; never reaches the caller.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, provider_name, "REALTIME_UNAVAILABLE", super_details)
        self.status_code = status_code
