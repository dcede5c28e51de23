from __future__ import annotations

from fastapi import APIRouter

from travelsafe.models.incident import SAFETY_LEVELS, SCAM_CATEGORIES
from travelsafe.services import taxonomy

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])


@router.get("/categories")
def list_categories():
    """The 11 scam categories with their map colour and sample descriptions."""
    return {
        "categories": [
            {
                "name": name,
                "color": taxonomy.color_for(name),
                "descriptions": list(taxonomy.descriptions_for(name)),
            }
            for name in SCAM_CATEGORIES
        ],
        "safety_levels": list(SAFETY_LEVELS),
    }


@router.get("/countries")
def list_countries():
    return {
        "countries": [
            {
                "country": entry.country,
                "cities": list(entry.cities),
                "common_scams": list(entry.common_scams),
                "safety_level": entry.safety_level,
            }
            for entry in taxonomy.countries()
        ]
    }
