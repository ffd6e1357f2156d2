"""
quickgit logging utilities.

Provides configurable logging for the provisioning workflow, provider HTTP
requests/responses and git commands. Ensures no access tokens are logged.
"""

import logging
import re
from typing import Any

# Package loggers
_root_logger = logging.getLogger("quickgit")
_http_logger = logging.getLogger("quickgit.http")
_git_logger = logging.getLogger("quickgit.git")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Query string tokens (Gitee passes access_token in the URL)
    (re.compile(r"(access_token=)[^&\s]+"), r"\1[REDACTED]"),
    # Authorization headers
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-\.]{8,}"), r"\1 [REDACTED]"),
    # GitHub personal access tokens
    (re.compile(r"gh[pousr]_[A-Za-z0-9]{20,}"), "[TOKEN_REDACTED]"),
    # Secret/token/password assignments
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"token", "access_token", "authorization", "password", "secret"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    git_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure quickgit logging.

    Args:
        level: Default log level for all quickgit loggers (default: INFO)
        http_level: Log level for provider HTTP logging (default: same as level)
        git_level: Log level for git command logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from quickgit.logging import configure_logging

        # Show every git command and HTTP request
        configure_logging(level=logging.INFO, http_level=logging.DEBUG, git_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _git_logger.setLevel(git_level if git_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a quickgit logger.

    Args:
        name: Logger name suffix (e.g., "http", "git"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"quickgit.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask access tokens and other secrets in a string.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: token, access_token, authorization, password, secret)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = str(key).lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """Log a provider HTTP request at DEBUG level with secrets masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {mask_sensitive_data(url)}"]

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: Any = None,
    elapsed_ms: float | None = None,
) -> None:
    """Log a provider HTTP response at DEBUG level with secrets masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if isinstance(body, dict):
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_git_command(args: list[str], cwd: str | None = None) -> None:
    """Log a git invocation at DEBUG level."""
    if not _git_logger.isEnabledFor(logging.DEBUG):
        return

    command = mask_sensitive_data(" ".join(args))
    if cwd:
        _git_logger.debug(f"{command} | cwd={cwd}")
    else:
        _git_logger.debug(command)


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_git_command",
]
