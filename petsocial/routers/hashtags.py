import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, RedirectResponse
from google.cloud.firestore import Client as FirestoreClient

from petsocial import dependencies
from petsocial.config import settings
from petsocial.models.post import PostListResponse
from petsocial.routers.posts import to_post_response
from petsocial.services import firestore_service
from petsocial.utils.content import clean_hashtag_param, validate_hashtag

router = APIRouter(prefix="/api/v1", tags=["hashtags"])


@router.get("/hashtags/{tag}/posts", response_model=PostListResponse)
def posts_by_hashtag(
    tag: str,
    cursor: str | None = None,
    limit: int = Query(default=settings.default_page_size, ge=1, le=100),
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    if not validate_hashtag(tag):
        logging.warning("Rejected malformed hashtag %r", tag)
        raise HTTPException(
            status_code=400,
            detail="Hashtags may only contain letters, numbers and underscores",
        )
    posts, next_cursor = firestore_service.list_posts_by_hashtag(
        db, tag.lower(), cursor=cursor, limit=limit
    )
    return PostListResponse(posts=[to_post_response(p) for p in posts], next_cursor=next_cursor)


@router.get("/hashtag")
def resolve_hashtag(tag: str | None = None):
    """Turn a free-form ``tag`` query value into a redirect to its hashtag page."""
    if not tag:
        return RedirectResponse(url="/api/v1/posts")

    clean_tag = clean_hashtag_param(tag)
    if not validate_hashtag(clean_tag):
        return JSONResponse(
            status_code=400,
            content={
                "error": "invalid_hashtag",
                "message": "Hashtags may only contain letters, numbers and underscores",
                "original_tag": tag,
                "cleaned_tag": clean_tag,
            },
        )
    return RedirectResponse(url=f"/api/v1/hashtags/{clean_tag}/posts")
