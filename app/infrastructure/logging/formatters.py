"""Structlog processors used by the logging setup."""

from typing import Any

# Keys whose values never reach the log output
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that adds application name and version.

    Args:
        app_name: Name of the application.
        app_version: Version string (git SHA) for the application.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks credential-like fields.

    Keys are matched case-insensitively against SENSITIVE_PATTERNS, so a
    provider ``api_key`` passed as log context is replaced by ``mask_value``.

    Args:
        mask_value: Replacement for sensitive values.
        additional_patterns: Extra key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if value is not None and any(p in key_lower for p in patterns):
                masked[key] = mask_value
            else:
                masked[key] = value
        return masked

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates long string values.

    Imported payloads and translation values can be arbitrarily long.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
