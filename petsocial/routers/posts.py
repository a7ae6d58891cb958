import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from google.cloud.firestore import Client as FirestoreClient

from petsocial import dependencies
from petsocial.config import settings
from petsocial.exceptions import NotFoundError
from petsocial.models.post import PostCreate, PostListResponse, PostResponse
from petsocial.services import firestore_service
from petsocial.services.tagging import post_tags
from petsocial.utils.content import LinkTemplate, html_link_template, render_html, validate_hashtag

router = APIRouter(prefix="/api/v1", tags=["posts"])


def link_template() -> LinkTemplate:
    return html_link_template(
        hashtag_prefix=settings.hashtag_path_prefix,
        user_prefix=settings.user_path_prefix,
        pet_prefix=settings.pet_path_prefix,
        css_class=settings.link_css_class,
    )


def to_post_response(post: dict) -> PostResponse:
    return PostResponse(**post, content_html=render_html(post["content"], link_template()))


@router.post("/posts", response_model=PostResponse, status_code=201)
def create_post(body: PostCreate, db: FirestoreClient = Depends(dependencies.get_firestore_client)):
    explicit_tags = []
    for raw in body.hashtags:
        tag = raw.strip().removeprefix("#")
        if not validate_hashtag(tag):
            raise HTTPException(status_code=400, detail=f"Invalid hashtag '{raw}'")
        explicit_tags.append(tag)

    data = body.model_dump() | post_tags(body.content, extra_hashtags=explicit_tags)
    data["extra_hashtags"] = sorted({tag.lower() for tag in explicit_tags})
    post_id, post = firestore_service.create_post(db, data)
    logging.info("Created post %s with %d hashtags", post_id, len(data["hashtags"]))
    return to_post_response(post)


@router.get("/posts", response_model=PostListResponse)
def list_posts(
    cursor: str | None = None,
    limit: int = Query(default=settings.default_page_size, ge=1, le=100),
    db: FirestoreClient = Depends(dependencies.get_firestore_client),
):
    posts, next_cursor = firestore_service.list_posts(db, cursor=cursor, limit=limit)
    return PostListResponse(posts=[to_post_response(p) for p in posts], next_cursor=next_cursor)


@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: FirestoreClient = Depends(dependencies.get_firestore_client)):
    post = firestore_service.get_post(db, post_id)
    if not post:
        raise NotFoundError("Post", post_id)
    return to_post_response(post)
