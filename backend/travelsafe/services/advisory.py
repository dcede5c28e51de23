# backend/travelsafe/services/advisory.py
"""
Advisory refresh simulator: emulates a periodic external feed by appending
a dated advisory note to a random ~30% of the records it is given.
"""
from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from travelsafe.models.incident import IncidentRecord
from travelsafe.services import taxonomy

UPDATE_PROBABILITY = 0.3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def advisory_note(advisory: str, when: datetime) -> str:
    return f" [UPDATED {when.date().isoformat()}: {advisory}]"


class AdvisoryRefresher:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
        probability: float = UPDATE_PROBABILITY,
    ) -> None:
        self.rng = rng or random.Random()
        self.clock = clock
        self.probability = probability

    def refresh(self, records: Iterable[IncidentRecord]) -> List[IncidentRecord]:
        """Same length and order; touched records get a note and a fresh updated_at."""
        now = self.clock().replace(microsecond=0)
        out: List[IncidentRecord] = []
        for record in records:
            data = record.model_dump()
            if self.rng.random() < self.probability:
                advisory = self.rng.choice(taxonomy.ADVISORIES)
                data["description"] = (record.description or "") + advisory_note(advisory, now)
                data["updated_at"] = now
            # rebuilt through the model so category is re-checked either way
            out.append(IncidentRecord.model_validate(data))
        return out
