from datetime import datetime

from pydantic import BaseModel, Field

from petsocial.utils.content import TokenKind


class PostCreate(BaseModel):
    user_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    pet_id: str | None = None
    image_url: str | None = None
    hashtags: list[str] = []  # tags picked in the composer in addition to those in the text


class PostResponse(BaseModel):
    id: str
    user_id: str
    pet_id: str | None = None
    content: str
    content_html: str
    image_url: str | None = None
    hashtags: list[str] = []
    tagged_users: list[str] = []
    tagged_pets: list[str] = []
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime


class PostListResponse(BaseModel):
    posts: list[PostResponse]
    next_cursor: str | None = None


class TokenOut(BaseModel):
    kind: TokenKind
    value: str


class TaggedUser(BaseModel):
    id: str
    username: str


class TaggedPet(BaseModel):
    id: str
    name: str = ""


class PreviewRequest(BaseModel):
    content: str = ""
    hashtags: list[str] = []
    tagged_users: list[TaggedUser] = []
    tagged_pets: list[TaggedPet] = []


class PreviewResponse(BaseModel):
    html: str
    tokens: list[TokenOut]
    hashtags: list[str]
