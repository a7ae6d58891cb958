import os

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore import Client as FirestoreClient

from petsocial.config import settings

_app: firebase_admin.App | None = None


def is_emulator() -> bool:
    """Check if running against the Firestore emulator."""
    return bool(os.environ.get("FIRESTORE_EMULATOR_HOST"))


def _init_firebase() -> None:
    global _app
    if _app is not None:
        return

    if is_emulator():
        # firebase-admin picks up FIRESTORE_EMULATOR_HOST itself; no credentials needed.
        _app = firebase_admin.initialize_app(
            None,
            {"projectId": settings.firebase_project_id or "petsocial-dev"},
        )
    else:
        if settings.firebase_credentials_path:
            cred = credentials.Certificate(settings.firebase_credentials_path)
        else:
            cred = credentials.ApplicationDefault()
        _app = firebase_admin.initialize_app(
            cred,
            {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None,
        )


def get_firestore_client() -> FirestoreClient:
    """Request dependency: the process-wide Firestore client."""
    _init_firebase()
    return firestore.client()
