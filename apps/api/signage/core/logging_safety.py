"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip().lower()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def safe_email_domain(email: Any) -> str:
    """Keep only the domain part of an email address for log fields."""
    text = str(email or "").strip().lower()
    _, separator, domain = text.rpartition("@")
    if not separator or not domain:
        return "unknown"
    return domain
