"""Redaction helpers for log lines that may carry OAuth material."""

from __future__ import annotations

import re

_QUERY_SECRET_RE = re.compile(
    r"(?i)\b(code|state|token|secret|client_secret|access_token|refresh_token)=([^&\s]+)"
)
_AUTH_HEADER_RE = re.compile(r"(?i)\b(bearer|basic)(\s+)([A-Za-z0-9._~+/=-]+)")


def redact_secrets(text: str) -> str:
    """Mask tokens, authorization codes and credentials in a log string."""
    if not text:
        return text
    redacted = _QUERY_SECRET_RE.sub(r"\1=***", text)
    return _AUTH_HEADER_RE.sub(r"\1\2***", redacted)
