"""CacheConfig — tunables for debouncing and quota recovery."""

from __future__ import annotations

from pydantic import BaseModel, Field

IMAGE_PLACEHOLDER = "[Image removed to save space]"


class CacheConfig(BaseModel):
    """Configuration for a :class:`~workspace_cache.cache.DurableCache`.

    Attributes:
        debounce_seconds:   Delay after the last ``save`` for a key before
                            the commit runs.
        max_sanitize_depth: How deep the quota-recovery pass recurses into
                            nested lists and dicts.
        image_threshold:    Strings longer than this that start with
                            ``image_prefix`` are replaced during recovery.
        image_prefix:       Marker identifying embedded image payloads.
        image_placeholder:  Replacement text for stripped payloads.
        flush_on_exit:      Flush pending writes when the interpreter
                            exits, while the cache is still alive.
    """

    debounce_seconds: float = Field(default=1.0, gt=0)
    max_sanitize_depth: int = Field(default=5, ge=0)
    image_threshold: int = Field(default=500, ge=0)
    image_prefix: str = "data:image"
    image_placeholder: str = IMAGE_PLACEHOLDER
    flush_on_exit: bool = True
