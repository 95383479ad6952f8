from __future__ import annotations

from typing import Optional, Protocol

from .model import PayrollSettings


class PayrollSettingsRepository(Protocol):
    def get_for_school(self, *, school_id: str) -> Optional[PayrollSettings]:
        """Return the school's settings, or None when it has no settings row.

        Query failures must raise, not return None.
        """

        raise NotImplementedError
