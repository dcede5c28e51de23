# backend/travelsafe/services/generator.py
"""
Synthetic incident generator.

Walks the taxonomy (country -> city -> local scam names) and emits
geotagged IncidentRecords: jittered around the city centroid, dated within
the last 90 days, verified with a probability tied to the country's
baseline safety rating. All randomness and time come from the injected
`rng` / `clock` so tests can pin them down.
"""
from __future__ import annotations

import math
import random
import re
import string
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from travelsafe.models.incident import IncidentRecord
from travelsafe.services import taxonomy

# ±0.025° on each axis, roughly ±2.5 km
JITTER_DEGREES = 0.025
START_WINDOW_DAYS = 90
CREATED_WINDOW = timedelta(days=90)
UPDATED_WINDOW = timedelta(days=30)
MIN_PER_CITY, MAX_PER_CITY = 1, 5
MIN_DURATION_DAYS, MAX_DURATION_DAYS = 1, 7
END_DATE_PROBABILITY = 0.5
OFFICIAL_SOURCE_PROBABILITY = 0.3

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _slug(text: str) -> str:
    return re.sub(r"\W+", "-", text.lower()).strip("-")


class IncidentGenerator:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.rng = rng or random.Random()
        self.clock = clock

    def generate(self, target_count: int) -> List[IncidentRecord]:
        """
        Return at most `target_count` records, spread over the countries
        (ceil(target / countries) each) until the target is reached.
        Cities without a known centroid are skipped.
        """
        if target_count <= 0:
            return []

        entries = taxonomy.countries()
        per_country = math.ceil(target_count / len(entries))
        now = self.clock().replace(microsecond=0)
        records: List[IncidentRecord] = []

        for entry in entries:
            made_in_country = 0
            for city in entry.cities:
                coords = taxonomy.city_coordinates(city)
                if coords is None:
                    continue

                count = min(
                    self.rng.randint(MIN_PER_CITY, MAX_PER_CITY),
                    per_country - made_in_country,
                    target_count - len(records),
                )
                if count <= 0:
                    break

                location = f"{city}, {entry.country}"
                for i in range(count):
                    records.append(self._make_record(location, coords, entry, i, now))
                made_in_country += count

            if len(records) >= target_count:
                break

        return records

    # ---------- internals ----------
    def _token(self, length: int = 8) -> str:
        return "".join(self.rng.choice(_TOKEN_ALPHABET) for _ in range(length))

    def _make_record(
        self,
        location: str,
        coords: Tuple[float, float],
        entry: taxonomy.CountryEntry,
        index: int,
        now: datetime,
    ) -> IncidentRecord:
        rng = self.rng
        archetypes = entry.common_scams or (taxonomy.DEFAULT_ARCHETYPE,)
        archetype = rng.choice(archetypes)
        category = taxonomy.category_for(archetype)
        description = rng.choice(taxonomy.descriptions_for(category))

        lat = coords[0] + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES)
        lng = coords[1] + rng.uniform(-JITTER_DEGREES, JITTER_DEGREES)

        start_date = now - timedelta(days=rng.randrange(START_WINDOW_DAYS))
        end_date = None
        if rng.random() < END_DATE_PROBABILITY:
            end_date = start_date + timedelta(days=rng.randint(MIN_DURATION_DAYS, MAX_DURATION_DAYS))

        verified = rng.random() < taxonomy.verification_probability(entry.safety_level)
        source = "official" if rng.random() < OFFICIAL_SOURCE_PROBABILITY else "user_reported"

        # independent draws: updated_at may precede created_at
        created_at = now - timedelta(seconds=int(rng.random() * CREATED_WINDOW.total_seconds()))
        updated_at = now - timedelta(seconds=int(rng.random() * UPDATED_WINDOW.total_seconds()))

        return IncidentRecord(
            id=f"global-scam-{_slug(location)}-{index}",
            title=f"{archetype} in {location}",
            description=description,
            location=location,
            latitude=lat,
            longitude=lng,
            start_date=start_date,
            end_date=end_date,
            is_scam_related=True,
            category=category,
            safety_level=entry.safety_level,
            verified=verified,
            source=source,
            external_id=f"ext-{self._token()}",
            external_url=f"https://travelsafety.org/reports/{self._token()}" if verified else None,
            created_at=created_at,
            updated_at=updated_at,
        )


def generate_incidents(target_count: int = 500, *, seed: Optional[int] = None) -> List[IncidentRecord]:
    """Convenience wrapper used by scripts."""
    return IncidentGenerator(rng=random.Random(seed)).generate(target_count)
