"""Namespaced storage keys for every entity the workspace persists."""

from __future__ import annotations

from typing import ClassVar

STORAGE_PREFIX = "premiere_mortgage_"


class StorageKeys:
    """Statically declared keys.  Each entity type owns exactly one key."""

    CLIENTS: ClassVar[str] = f"{STORAGE_PREFIX}clients"
    TEMPLATES: ClassVar[str] = f"{STORAGE_PREFIX}templates"
    RATES: ClassVar[str] = f"{STORAGE_PREFIX}rates"
    NOTES: ClassVar[str] = f"{STORAGE_PREFIX}notes"
    RECENT_IDS: ClassVar[str] = f"{STORAGE_PREFIX}recent_ids"
    CHAT_HISTORY: ClassVar[str] = f"{STORAGE_PREFIX}chat_history"
    DEAL_STAGES: ClassVar[str] = f"{STORAGE_PREFIX}deal_stages"
    USER_PROFILE: ClassVar[str] = f"{STORAGE_PREFIX}user_profile"
    MARKETING_DATA: ClassVar[str] = f"{STORAGE_PREFIX}marketing_data"
    CALCULATOR_SCENARIO: ClassVar[str] = f"{STORAGE_PREFIX}calculator_scenario"
    DTI_DATA: ClassVar[str] = f"{STORAGE_PREFIX}dti_data"
    COMP_SETTINGS: ClassVar[str] = f"{STORAGE_PREFIX}comp_settings"
    MANUAL_DEALS: ClassVar[str] = f"{STORAGE_PREFIX}manual_deals"
    SAVED_VIEWS: ClassVar[str] = f"{STORAGE_PREFIX}saved_views"
    MARKET_DATA: ClassVar[str] = f"{STORAGE_PREFIX}market_data"
    VALUATIONS: ClassVar[str] = f"{STORAGE_PREFIX}valuations"

    @classmethod
    def all(cls) -> list[str]:
        """Return every declared key in declaration order."""
        return [
            value
            for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        ]
