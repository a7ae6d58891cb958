#!/usr/bin/env python3
"""
Export the app's Firestore collections (events, services, users, pets, posts) to JSON files.
Run from project root. Uses .env for credentials.
"""
import json
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path; pydantic-settings loads .env from cwd
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from petsocial.dependencies import get_firestore_client

COLLECTIONS = ["events", "services", "users", "pets", "posts"]


def _serialize_value(val):
    """Convert Firestore values to JSON-serializable types."""
    if val is None:
        return None
    if hasattr(val, "latitude") and hasattr(val, "longitude"):
        return {"latitude": val.latitude, "longitude": val.longitude}
    if isinstance(val, datetime):
        return val.isoformat()
    if isinstance(val, dict):
        return {k: _serialize_value(v) for k, v in val.items()}
    if isinstance(val, list):
        return [_serialize_value(v) for v in val]
    return val


def export_collection(db, collection_name: str) -> list[dict]:
    result = []
    for doc in db.collection(collection_name).stream():
        serialized = {k: _serialize_value(v) for k, v in doc.to_dict().items()}
        serialized["_id"] = doc.id
        result.append(serialized)
    return result


def main():
    out_dir = Path(__file__).resolve().parent.parent / "_backup" / "firestore"
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        db = get_firestore_client()
    except Exception as e:
        print(f"Firestore connection failed: {e}")
        return 1

    total_docs = 0
    for coll in COLLECTIONS:
        try:
            docs = export_collection(db, coll)
        except Exception as e:
            print(f"  {coll}: skipped ({e})")
            continue
        total_docs += len(docs)
        out_path = out_dir / f"{coll}.json"
        with open(out_path, "w") as f:
            json.dump(docs, f, indent=2)
        print(f"  {coll}: {len(docs)} docs -> {out_path}")

    print(f"\nFirestore backup complete: {total_docs} total docs in {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
