from fastapi import APIRouter

from petsocial.models.post import PreviewRequest, PreviewResponse, TokenOut
from petsocial.routers.posts import link_template
from petsocial.utils.content import annotate, extract_hashtags, generate_preview_content

router = APIRouter(prefix="/api/v1/content", tags=["content"])


@router.post("/preview", response_model=PreviewResponse)
def preview_content(body: PreviewRequest):
    """Rendered preview of a post being composed, plus the tokens found in its text."""
    html = generate_preview_content(
        body.content,
        hashtags=body.hashtags,
        tagged_users=[u.username for u in body.tagged_users],
        tagged_pets=[p.id for p in body.tagged_pets],
        link_template=link_template(),
    )
    tokens = [TokenOut(kind=t.kind, value=t.value) for t in annotate(body.content).tokens]
    return PreviewResponse(html=html, tokens=tokens, hashtags=sorted(extract_hashtags(body.content)))
