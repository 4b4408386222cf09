"""Target catalog and per-frame target selection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from hellcompass._constants import (
    EARTH_RADIUS_KM,
    HELL_LATITUDE_DEG,
    HELL_LONGITUDE_DEG,
    HELL_NAME,
    HELL_NATION,
    HELL_REGION,
    HELL_URL,
)
from hellcompass.angles import radians_from_degrees
from hellcompass.config import TargetMode
from hellcompass.exceptions import CatalogError, UnknownTargetError
from hellcompass.geodesy import closest
from hellcompass.models.geo import GeoPoint, TargetLocation

_logger = logging.getLogger(__name__)


def target_from_entry(entry: Mapping[str, Any]) -> TargetLocation:
    """Build a target from a catalog entry with coordinates in degrees.

    Raises :class:`CatalogError` for entries without a name or usable
    coordinates.
    """
    try:
        latitude = float(entry.get("latitude", entry.get("latitude_deg")))
        longitude = float(entry.get("longitude", entry.get("longitude_deg")))
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"catalog entry {entry.get('name')!r} has no usable coordinates") from exc
    try:
        return TargetLocation(
            name=str(entry.get("name") or ""),
            region=str(entry.get("region") or ""),
            nation=str(entry.get("nation") or ""),
            url=str(entry.get("url") or ""),
            latitude=radians_from_degrees(latitude),
            longitude=radians_from_degrees(longitude),
        )
    except ValidationError as exc:
        raise CatalogError(f"invalid catalog entry {entry.get('name')!r}: {exc}") from exc


HELL = target_from_entry(
    {
        "name": HELL_NAME,
        "region": HELL_REGION,
        "nation": HELL_NATION,
        "url": HELL_URL,
        "latitude": HELL_LATITUDE_DEG,
        "longitude": HELL_LONGITUDE_DEG,
    }
)


class TargetCatalog:
    """Ordered, non-empty collection of targets."""

    def __init__(self, targets: Iterable[TargetLocation]) -> None:
        self._targets: tuple[TargetLocation, ...] = tuple(targets)
        if not self._targets:
            raise CatalogError("catalog must contain at least one target")

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> TargetCatalog:
        return cls(target_from_entry(entry) for entry in entries)

    @classmethod
    def default(cls) -> TargetCatalog:
        return cls([HELL])

    def __iter__(self) -> Iterator[TargetLocation]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def by_name(self, name: str) -> TargetLocation:
        """Case-insensitive lookup; first match wins."""
        wanted = name.strip().casefold()
        for target in self._targets:
            if target.name.casefold() == wanted:
                return target
        raise UnknownTargetError(name)

    def closest_to(self, origin: GeoPoint, *, radius_km: float = EARTH_RADIUS_KM) -> TargetLocation:
        return closest(origin, self._targets, radius_km=radius_km)


class TargetSelector:
    """Decides which target a frame points at.

    In ``fixed`` mode the selection is made once (by name, defaulting
    to the first entry).  In ``closest`` mode it is re-resolved from the
    current fix every frame; without a fix the fixed choice is used.
    """

    def __init__(
        self,
        catalog: TargetCatalog,
        *,
        mode: TargetMode = TargetMode.FIXED,
        name: str | None = None,
        radius_km: float = EARTH_RADIUS_KM,
    ) -> None:
        self._catalog = catalog
        self._mode = TargetMode(mode)
        self._radius_km = radius_km
        self._fixed = catalog.by_name(name) if name else next(iter(catalog))

    @property
    def mode(self) -> TargetMode:
        return self._mode

    @property
    def catalog(self) -> TargetCatalog:
        return self._catalog

    def select(self, name: str) -> TargetLocation:
        """Pick a target explicitly and switch to ``fixed`` mode."""
        self._fixed = self._catalog.by_name(name)
        self._mode = TargetMode.FIXED
        _logger.debug("Selected target %s", self._fixed.label)
        return self._fixed

    def use_closest(self) -> None:
        self._mode = TargetMode.CLOSEST

    def resolve(self, origin: GeoPoint | None) -> TargetLocation:
        if self._mode == TargetMode.CLOSEST and origin is not None:
            return self._catalog.closest_to(origin, radius_km=self._radius_km)
        return self._fixed
