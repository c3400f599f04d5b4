"""Standard error message templates."""

from typing import Any

from etfpulse.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """Error message template registry."""

    _templates: dict[ErrorCode, str] = {
        ErrorCode.GENERAL_ERROR: "An unknown error occurred",
        ErrorCode.CONFIGURATION_ERROR: "Configuration error: {details}",
        ErrorCode.INVALID_REQUEST: "Invalid request: {message}",
        ErrorCode.PROVIDER_ERROR: "Data source {provider} failed: {message}",
        ErrorCode.UPSTREAM_ERROR: "Upstream error from {provider}: {message}",
        ErrorCode.REALTIME_UNAVAILABLE: "Realtime quotes from {provider} unavailable",
        ErrorCode.OUTPUT_ERROR: "Unable to write output to {path}",
        ErrorCode.INTERNAL_ERROR: "Internal error",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Return the formatted message for ``error_code``.

        Falls back to the generic message when a template variable is missing.
        """
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"


def format_error_response(error_code: ErrorCode, message: str | None = None, **kwargs: Any) -> dict[str, Any]:
    """Build the error document returned to callers.

    Args:
        error_code: error category
        message: explicit message (optional, otherwise taken from the template)
        **kwargs: template variables

    Returns:
        ``{"ok": False, "error": <code>, "message": <text>}``
    """
    if message is None:
        message = ErrorMessageTemplate.get_message(error_code, **kwargs)

    return {
        "ok": False,
        "error": error_code.value,
        "message": message,
    }
