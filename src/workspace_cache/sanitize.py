"""Quota-recovery transform that strips embedded image payloads."""

from __future__ import annotations

from typing import Any

from workspace_cache.config import IMAGE_PLACEHOLDER


def sanitize_for_storage(
    data: Any,
    *,
    max_depth: int = 5,
    threshold: int = 500,
    prefix: str = "data:image",
    placeholder: str = IMAGE_PLACEHOLDER,
    _depth: int = 0,
) -> Any:
    """Return a copy of *data* with large image data-URIs replaced.

    Walks lists and dicts up to *max_depth* levels; anything nested deeper
    is returned as-is.  Only strings that start with *prefix* and are
    longer than *threshold* characters are replaced.  The input is never
    mutated.
    """
    if _depth > max_depth:
        return data

    options = {
        "max_depth": max_depth,
        "threshold": threshold,
        "prefix": prefix,
        "placeholder": placeholder,
        "_depth": _depth + 1,
    }

    if isinstance(data, str):
        if data.startswith(prefix) and len(data) > threshold:
            return placeholder
        return data

    if isinstance(data, list | tuple):
        return [sanitize_for_storage(item, **options) for item in data]

    if isinstance(data, dict):
        return {key: sanitize_for_storage(value, **options) for key, value in data.items()}

    return data
