"""Great-circle proximity search used by the nearby events, services, pets and users endpoints."""
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from petsocial.exceptions import InvalidArgument

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoCandidate:
    """Anything with an id and an optional location (event, service, pet, user)."""
    id: str
    location: GeoPoint | None
    payload: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ProximityResult:
    candidate: GeoCandidate
    distance_km: float


def validate_geo_point(point: GeoPoint, name: str = "origin") -> None:
    """Raise InvalidArgument unless both coordinates are finite and in range."""
    lat, lon = point.latitude, point.longitude
    if not (isinstance(lat, (int, float)) and math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise InvalidArgument(
            f"{name} latitude must be a finite number between -90 and 90",
            field=f"{name}.latitude",
            value=lat,
        )
    if not (isinstance(lon, (int, float)) and math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise InvalidArgument(
            f"{name} longitude must be a finite number between -180 and 180",
            field=f"{name}.longitude",
            value=lon,
        )


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def filter_nearby(
    origin: GeoPoint,
    radius_km: float,
    candidates: Iterable[GeoCandidate],
) -> list[ProximityResult]:
    """
    Return the candidates within ``radius_km`` of ``origin``, nearest first.

    Candidates without a location are skipped. Equal distances keep their
    input order. A non-positive radius yields no results.
    """
    validate_geo_point(origin)
    if isinstance(radius_km, float) and math.isnan(radius_km):
        raise InvalidArgument("radius must be a number", field="radius_km", value=radius_km)
    if radius_km <= 0:
        return []

    results: list[ProximityResult] = []
    skipped = 0
    for candidate in candidates:
        if candidate.location is None:
            skipped += 1
            continue
        distance = haversine_km(origin, candidate.location)
        # NaN never satisfies this, so malformed stored coordinates drop out too
        if distance <= radius_km:
            results.append(ProximityResult(candidate=candidate, distance_km=distance))

    if skipped:
        logging.debug("Skipped %d candidates without a location", skipped)

    results.sort(key=lambda r: r.distance_km)
    return results
