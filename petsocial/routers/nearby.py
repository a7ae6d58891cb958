import logging

from fastapi import APIRouter, Depends, Query
from google.cloud.firestore import Client as FirestoreClient

from petsocial import dependencies
from petsocial.config import settings
from petsocial.models.common import GeoPointIn
from petsocial.models.nearby import (
    EventWindow,
    NearbyEvent,
    NearbyEventListResponse,
    NearbyPet,
    NearbyPetListResponse,
    NearbyService,
    NearbyServiceListResponse,
    NearbyUser,
    NearbyUserListResponse,
    PetSummary,
)
from petsocial.services import firestore_service
from petsocial.utils.proximity import GeoCandidate, GeoPoint, ProximityResult, filter_nearby

router = APIRouter(prefix="/api/v1/nearby", tags=["nearby"])


def _to_candidates(records: list[dict]) -> list[GeoCandidate]:
    candidates = []
    for record in records:
        loc = record.get("location")
        location = GeoPoint(loc.latitude, loc.longitude) if loc is not None else None
        candidates.append(GeoCandidate(id=record["id"], location=location, payload=record))
    return candidates


def _search(lat: float, lng: float, radius_km: float, records: list[dict], kind: str) -> list[ProximityResult]:
    results = filter_nearby(GeoPoint(lat, lng), radius_km, _to_candidates(records))
    logging.info(
        "Nearby %s: %d of %d within %.2f km of (%f, %f)",
        kind, len(results), len(records), radius_km, lat, lng,
    )
    return results


@router.get("/events", response_model=NearbyEventListResponse)
def nearby_events(
    lat: float,
    lng: float,
    radius: float | None = None,
    when: EventWindow = EventWindow.upcoming,
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    radius_km = settings.event_radius_km if radius is None else radius
    events = firestore_service.list_published_events(db, when=when.value)
    results = _search(lat, lng, radius_km, events, "events")
    return NearbyEventListResponse(
        events=[NearbyEvent(**r.candidate.payload, distance_km=r.distance_km) for r in results],
        origin=GeoPointIn(latitude=lat, longitude=lng),
        radius_km=radius_km,
    )


@router.get("/services", response_model=NearbyServiceListResponse)
def nearby_services(
    category: str,
    lat: float | None = None,
    lng: float | None = None,
    radius: float | None = None,
    all_: bool = Query(False, alias="all"),
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    """
    Active services of a category, nearest first. Without coordinates, or with
    ``all=true``, every service in the category is returned unranked.
    """
    services = firestore_service.list_active_services(db, category)

    if all_ or lat is None or lng is None:
        return NearbyServiceListResponse(
            services=[NearbyService(**s) for s in services],
            ranked=False,
        )

    radius_km = settings.service_radius_km if radius is None else radius
    results = _search(lat, lng, radius_km, services, "services")
    return NearbyServiceListResponse(
        services=[NearbyService(**r.candidate.payload | {"distance_km": r.distance_km}) for r in results],
        ranked=True,
    )


@router.get("/pets", response_model=NearbyPetListResponse)
def nearby_pets(
    lat: float,
    lng: float,
    radius: float | None = None,
    exclude_user_id: str | None = None,
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    radius_km = settings.pet_radius_km if radius is None else radius
    pets = firestore_service.list_pets_with_owner_location(db, exclude_user_id=exclude_user_id)
    results = _search(lat, lng, radius_km, pets, "pets")
    return NearbyPetListResponse(
        pets=[NearbyPet(**r.candidate.payload, distance_km=r.distance_km) for r in results],
    )


@router.get("/users", response_model=NearbyUserListResponse)
def nearby_users(
    lat: float,
    lng: float,
    radius: float | None = None,
    exclude_user_id: str | None = None,
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    """Public users near the given point, each with their pets."""
    radius_km = settings.user_radius_km if radius is None else radius
    users = firestore_service.list_public_users(db, exclude_user_id=exclude_user_id)
    results = _search(lat, lng, radius_km, users, "users")

    pets_by_owner = firestore_service.list_pets_by_owner(db) if results else {}
    nearby = []
    for r in results:
        user = r.candidate.payload
        nearby.append(NearbyUser(
            id=user["id"],
            username=user.get("username", ""),
            profile_image=user.get("profile_image"),
            followers_count=user.get("followers_count", 0),
            pets=[PetSummary(**p) for p in pets_by_owner.get(user["id"], [])],
            distance_km=r.distance_km,
        ))
    return NearbyUserListResponse(users=nearby)
