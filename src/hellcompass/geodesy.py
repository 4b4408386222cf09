"""Spherical geometry between two :class:`~hellcompass.models.GeoPoint` values.

All inputs and outputs are radians, except distances which are
kilometres.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TypeVar

from hellcompass._constants import DISTANCE_TOLERANCE_KM, EARTH_RADIUS_KM
from hellcompass.exceptions import CatalogError
from hellcompass.models.geo import GeoPoint

TPoint = TypeVar("TPoint", bound=GeoPoint)


def distance(a: GeoPoint, b: GeoPoint, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Great-circle distance from *a* to *b* in kilometres (haversine)."""
    dlat = b.latitude - a.latitude
    dlon = b.longitude - a.longitude
    h = math.sin(dlat / 2) ** 2 + math.cos(a.latitude) * math.cos(b.latitude) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    h = min(1.0, max(0.0, h))
    result = radius_km * 2 * math.asin(math.sqrt(h))
    if result < DISTANCE_TOLERANCE_KM:
        return 0.0
    return result


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial bearing from *a* to *b*.

    0 is north, increasing clockwise.  The result is the raw ``atan2``
    range ``(-π, π]``; callers wrap it where they use it.
    """
    dlon = b.longitude - a.longitude
    y = math.cos(b.latitude) * math.sin(dlon)
    x = math.cos(a.latitude) * math.sin(b.latitude) - math.sin(a.latitude) * math.cos(b.latitude) * math.cos(dlon)
    return math.atan2(y, x)


def vertical_angle(a: GeoPoint, b: GeoPoint, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Downward tilt suggesting how far away *b* is.

    Half the central angle between the points.  This models the target
    as sinking below the horizon in proportion to distance; it is not
    a true elevation angle (no altitude is involved).
    """
    return distance(a, b, radius_km=radius_km) / radius_km / 2


def closest(origin: GeoPoint, candidates: Iterable[TPoint], *, radius_km: float = EARTH_RADIUS_KM) -> TPoint:
    """Return the candidate nearest to *origin*.

    Ties keep the earliest candidate.  Raises :class:`~hellcompass.exceptions.CatalogError`
    when *candidates* is empty.
    """
    best: TPoint | None = None
    best_distance = math.inf
    for candidate in candidates:
        d = distance(origin, candidate, radius_km=radius_km)
        if d < best_distance:
            best, best_distance = candidate, d
    if best is None:
        raise CatalogError("no candidates to choose from")
    return best
