import uuid
from datetime import datetime, timezone

from google.cloud.firestore import Client as FirestoreClient
from google.cloud.firestore_v1 import FieldFilter
from google.cloud.firestore_v1.base_query import BaseQuery

from petsocial.models.common import GeoPointIn


def _geo_from_firestore(geo) -> GeoPointIn | None:
    if geo is None:
        return None
    return GeoPointIn(latitude=geo.latitude, longitude=geo.longitude)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _start_of_today() -> datetime:
    return _now().replace(hour=0, minute=0, second=0, microsecond=0)


def _doc_to_dict(doc) -> dict:
    data = doc.to_dict()
    data["id"] = doc.id
    if "location" in data:
        data["location"] = _geo_from_firestore(data["location"])
    return data


def _paginate(db: FirestoreClient, collection: str, query: BaseQuery, cursor: str | None, limit: int):
    if cursor:
        cursor_doc = db.collection(collection).document(cursor).get()
        if cursor_doc.exists:
            query = query.start_after(cursor_doc)

    docs = list(query.limit(limit + 1).stream())

    next_cursor = None
    if len(docs) > limit:
        next_cursor = docs[limit - 1].id
        docs = docs[:limit]

    return [_doc_to_dict(d) for d in docs], next_cursor


# --- Events ---

def list_published_events(db: FirestoreClient, when: str = "upcoming") -> list[dict]:
    """Published events; ``when`` is upcoming (from today), past (before today) or all."""
    direction = "DESCENDING" if when == "past" else "ASCENDING"
    query: BaseQuery = db.collection("events").order_by("date", direction=direction)
    query = query.where(filter=FieldFilter("is_published", "==", True))

    if when == "upcoming":
        query = query.where(filter=FieldFilter("date", ">=", _start_of_today()))
    elif when == "past":
        query = query.where(filter=FieldFilter("date", "<", _start_of_today()))

    return [_doc_to_dict(d) for d in query.stream()]


# --- Services (vets, shops, pet-friendly places) ---

def list_active_services(db: FirestoreClient, category: str) -> list[dict]:
    query: BaseQuery = db.collection("services").where(filter=FieldFilter("category", "==", category))
    query = query.where(filter=FieldFilter("is_active", "==", True))
    return [_doc_to_dict(d) for d in query.stream()]


# --- Users and pets ---

def list_public_users(db: FirestoreClient, exclude_user_id: str | None = None) -> list[dict]:
    query: BaseQuery = db.collection("users").where(filter=FieldFilter("is_public_profile", "==", True))
    users = [_doc_to_dict(d) for d in query.stream()]
    return [u for u in users if u["id"] != exclude_user_id]


def list_pets_by_owner(db: FirestoreClient) -> dict[str, list[dict]]:
    pets_by_owner: dict[str, list[dict]] = {}
    for doc in db.collection("pets").stream():
        pet = _doc_to_dict(doc)
        pets_by_owner.setdefault(pet.get("owner_id", ""), []).append(pet)
    return pets_by_owner


def list_pets_with_owner_location(db: FirestoreClient, exclude_user_id: str | None = None) -> list[dict]:
    """Pets of public users; each pet takes its owner's location, which may be None."""
    owners = {u["id"]: u for u in list_public_users(db, exclude_user_id=exclude_user_id)}
    pets = []
    for owner_id, owner_pets in list_pets_by_owner(db).items():
        owner = owners.get(owner_id)
        if owner is None:
            continue
        for pet in owner_pets:
            pet["location"] = owner.get("location")
            pet["owner_username"] = owner.get("username", "")
            pets.append(pet)
    return pets


# --- Posts ---

def create_post(db: FirestoreClient, data: dict) -> tuple[str, dict]:
    post_id = uuid.uuid4().hex
    doc_data = {
        "user_id": data["user_id"],
        "pet_id": data.get("pet_id"),
        "content": data["content"],
        "image_url": data.get("image_url"),
        "hashtags": data.get("hashtags", []),
        "extra_hashtags": data.get("extra_hashtags", []),
        "tagged_users": data.get("tagged_users", []),
        "tagged_pets": data.get("tagged_pets", []),
        "likes_count": 0,
        "comments_count": 0,
        "created_at": _now(),
    }
    db.collection("posts").document(post_id).set(doc_data)
    doc_data["id"] = post_id
    return post_id, doc_data


def get_post(db: FirestoreClient, post_id: str) -> dict | None:
    doc = db.collection("posts").document(post_id).get()
    if not doc.exists:
        return None
    return _doc_to_dict(doc)


def list_posts(db: FirestoreClient, cursor: str | None = None, limit: int = 20) -> tuple[list[dict], str | None]:
    query: BaseQuery = db.collection("posts").order_by("created_at", direction="DESCENDING")
    return _paginate(db, "posts", query, cursor, limit)


def list_posts_by_hashtag(
    db: FirestoreClient,
    hashtag: str,
    cursor: str | None = None,
    limit: int = 20,
) -> tuple[list[dict], str | None]:
    query: BaseQuery = db.collection("posts").order_by("created_at", direction="DESCENDING")
    query = query.where(filter=FieldFilter("hashtags", "array_contains", hashtag))
    return _paginate(db, "posts", query, cursor, limit)


def iter_posts(db: FirestoreClient):
    for doc in db.collection("posts").stream():
        yield _doc_to_dict(doc)


def update_post_tags(
    db: FirestoreClient,
    post_id: str,
    hashtags: list[str],
    tagged_users: list[str],
    tagged_pets: list[str],
) -> None:
    db.collection("posts").document(post_id).update({
        "hashtags": hashtags,
        "tagged_users": tagged_users,
        "tagged_pets": tagged_pets,
    })
