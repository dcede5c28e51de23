"""
H3 helpers used by the map layer.
"""

from typing import List, Tuple

import h3

DEFAULT_RESOLUTION = 7  # ~5 km² cells, city-district scale


def point_to_hex(lat: float, lng: float, resolution: int = DEFAULT_RESOLUTION) -> str:
    """
    Return the H3 hex ID for (lat, lng) at the given resolution.
    """
    return h3.latlng_to_cell(lat, lng, resolution)


def hex_to_center(hex_id: str) -> Tuple[float, float]:
    """
    Return (lat, lng) of the center of an H3 cell.
    """
    return h3.cell_to_latlng(hex_id)


def hex_boundary(hex_id: str) -> List[Tuple[float, float]]:
    """
    Boundary vertices as [(lat, lng), ...].
    """
    return [(lat, lng) for (lat, lng) in h3.cell_to_boundary(hex_id)]
