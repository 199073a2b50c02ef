# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

SENSITIVE_PATTERNS = [
    # Bearer / basic credentials in headers
    (r"(bearer\s+)([a-zA-Z0-9_\-\.]{20,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(basic\s+)([a-zA-Z0-9+/=]{8,})", r"\1***REDACTED***", re.IGNORECASE),
    (r"(authorization\s*[:=]\s*['\"]?)([^'\"\s]{10,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Session tokens
    (r"((?:access[_-]?)?token\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-\.]{20,})(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Password material
    (r"(password\s*[:=]\s*['\"]?)([^'\"\s]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(password[_-]?hash\s*[:=]\s*['\"]?)([^'\"\s]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),
    (r"(salt\s*[:=]\s*['\"]?)([^'\"\s]+)(['\"]?)", r"\1***REDACTED***\3", re.IGNORECASE),

    # Database URLs with credentials
    (r"(postgres(?:ql)?|mysql)(\+\w+)?://([^:/]+):([^@]+)@", r"\1\2://\3:***REDACTED***@"),

    # Email addresses (partial masking)
    (r"([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", r"***@\2"),
]

_COMPILED = [
    re.compile(pattern[0], pattern[2] if len(pattern) > 2 else 0) for pattern in SENSITIVE_PATTERNS
]
_REPLACEMENTS = [pattern[1] for pattern in SENSITIVE_PATTERNS]


def sanitize_message(message: str) -> str:
    sanitized = message
    for regex, replacement in zip(_COMPILED, _REPLACEMENTS):
        sanitized = regex.sub(replacement, sanitized)
    return sanitized


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter: scrub the message in place, never drop the record."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True
