"""Standard error codes shared by the service, web and CLI layers."""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable error categories."""

    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    REALTIME_UNAVAILABLE = "REALTIME_UNAVAILABLE"
    OUTPUT_ERROR = "OUTPUT_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
