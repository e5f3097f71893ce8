"""Shared output and exit-code helpers for command handlers."""

from __future__ import annotations

import json
import re

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_SERVICE_ERROR = 2
EXIT_IO_ERROR = 3

_SENSITIVE_FIELDS = (
    "api_token",
    "access_token",
    "tokencode",
    "secret_access_key",
    "session_token",
    "secret",
    "token",
    "authorization",
)


def sanitize_error_text(value: str) -> str:
    redacted = re.sub(r"(?i)(bearer\s+)(\S+)", r"\1[REDACTED]", value)
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^,&\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def print_error(stderr, prefix: str, message: str, *, code: int) -> int:
    print(f"{prefix}: {sanitize_error_text(message)}", file=stderr)
    return code


def print_json(stdout, payload: object) -> int:
    print(json.dumps(payload, sort_keys=True, indent=2), file=stdout)
    return EXIT_SUCCESS
