"""BootstrapStatus — what happened while loading persisted state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BootstrapStatus:
    """Immutable summary of hydration and migration.

    Attributes:
        recovered: ``True`` once any stored data had to be discarded or
                   skipped because it was unreadable.
        warnings:  Human-readable descriptions of each recovery, without
                   duplicates, in the order they were first seen.
    """

    recovered: bool = False
    warnings: tuple[str, ...] = ()

    def mark_recovery(self, message: str) -> BootstrapStatus:
        """Return a copy flagged as recovered, with *message* appended once."""
        if message in self.warnings:
            return BootstrapStatus(recovered=True, warnings=self.warnings)
        return BootstrapStatus(recovered=True, warnings=(*self.warnings, message))
