from fastapi import APIRouter, Depends, HTTPException
from google.cloud.firestore import Client as FirestoreClient

from petsocial import dependencies

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health")
def health_check(db: FirestoreClient = Depends(dependencies.get_firestore_client)):
    errors = []

    try:
        # Attempt a lightweight read to verify connectivity
        list(db.collection("posts").limit(1).stream())
    except Exception as e:
        errors.append(f"Firestore: {e}")

    if errors:
        raise HTTPException(status_code=503, detail={"status": "unhealthy", "errors": errors})

    return {"status": "healthy"}
