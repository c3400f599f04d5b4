"""Exception handling module."""

from etfpulse.core.exceptions.base import (
    EtfPulseError,
    InvalidRequestError,
    PrimaryFetchError,
    ProviderError,
    SecondaryFetchError,
)
from etfpulse.core.exceptions.codes import ErrorCode
from etfpulse.core.exceptions.messages import ErrorMessageTemplate, format_error_response

__all__ = [
    "EtfPulseError",
    "InvalidRequestError",
    "ProviderError",
    "PrimaryFetchError",
    "SecondaryFetchError",
    "ErrorCode",
    "ErrorMessageTemplate",
    "format_error_response",
]
