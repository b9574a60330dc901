from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import hours_between, now_local
from ..common.validators import require_non_empty
from ..core.constants import STALENESS_WINDOW_HOURS
from ..core.enums import SignalOutcome
from ..core.exceptions import NotFoundError, StaleUpdateError
from .model import PresencePatch, PresenceView, SignalResult
from .repository import PresenceRepository

logger = logging.getLogger(__name__)


class PresenceService:
    """CTC/CTG tracker: keeps the current state row and the per-day attendance log."""

    def __init__(self, presence: PresenceRepository, *, staleness_hours: float = STALENESS_WINDOW_HOURS):
        self._presence = presence
        self._staleness_hours = float(staleness_hours)

    def record_signal(
        self,
        fcc_id: str,
        *,
        ctc: bool,
        ctg: bool,
        task_completed: bool,
        force_update: bool = False,
        now: datetime | None = None,
    ) -> SignalResult:
        fcc_id = require_non_empty(fcc_id, "FCC_ID")
        now = now or now_local()

        patch = PresencePatch(
            ctc_time=now if ctc else None,
            ctg_time=now if ctg else None,
            task_completed=bool(task_completed),
        )

        state = self._presence.get_state(fcc_id)
        if state is None:
            outcome = SignalOutcome.INSERTED
        else:
            last = state.last_signal_at
            if last is not None and not force_update:
                elapsed = hours_between(last, now)
                if elapsed > self._staleness_hours:
                    logger.info("Rejected stale presence update for %s (%.1fh since last signal)", fcc_id, elapsed)
                    raise StaleUpdateError(
                        f"CTC is more than {self._staleness_hours:g} hours old. Update not allowed!"
                    )
            outcome = SignalOutcome.UPDATED

        self._presence.save_signal(fcc_id, patch, log_date=now.date(), insert=outcome is SignalOutcome.INSERTED)
        return SignalResult(outcome=outcome, fcc_id=fcc_id, log_date=now.date())

    def get_presence(self, fcc_id: str) -> PresenceView:
        fcc_id = require_non_empty(fcc_id, "FCC_ID")
        state = self._presence.get_state(fcc_id)
        if state is None:
            raise NotFoundError("Student not found")
        return PresenceView(state=state, logs=list(self._presence.list_log(fcc_id)))
