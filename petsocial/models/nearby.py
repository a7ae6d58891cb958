from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from petsocial.models.common import GeoPointIn


class EventWindow(str, Enum):
    upcoming = "upcoming"
    past = "past"
    all = "all"


class NearbyEvent(BaseModel):
    id: str
    title: str
    description: str = ""
    date: datetime
    location: GeoPointIn | None = None
    attendee_count: int = 0
    created_by: str | None = None
    distance_km: float


class NearbyEventListResponse(BaseModel):
    events: list[NearbyEvent]
    origin: GeoPointIn
    radius_km: float


class NearbyService(BaseModel):
    id: str
    title: str
    description: str = ""
    address: str = ""
    category: str
    phone: str = ""
    website: str = ""
    rating: float | None = None
    location: GeoPointIn | None = None
    distance_km: float | None = None  # None when the listing is not distance-ranked


class NearbyServiceListResponse(BaseModel):
    services: list[NearbyService]
    ranked: bool


class PetSummary(BaseModel):
    id: str
    name: str
    type: str = ""
    breed: str = ""
    image: str | None = None


class NearbyPet(PetSummary):
    owner_id: str
    owner_username: str
    distance_km: float


class NearbyPetListResponse(BaseModel):
    pets: list[NearbyPet]


class NearbyUser(BaseModel):
    id: str
    username: str
    profile_image: str | None = None
    followers_count: int = 0
    pets: list[PetSummary] = []
    distance_km: float


class NearbyUserListResponse(BaseModel):
    users: list[NearbyUser]
