"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for principal, tenant and post ids."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]
    return f"{prefix}-{digest}"
