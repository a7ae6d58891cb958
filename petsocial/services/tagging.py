from collections.abc import Iterable

from petsocial.utils.content import (
    extract_hashtags,
    extract_pet_mentions,
    extract_user_mentions,
    validate_hashtag,
)


def post_tags(content: str, extra_hashtags: Iterable[str] = ()) -> dict:
    """
    Hashtags, mentioned usernames and mentioned pet ids for a post body.

    ``extra_hashtags`` are tags chosen outside the text (composer chips, tags
    already stored on the post); malformed ones are dropped, so callers that
    must reject them should check with ``validate_hashtag`` first.
    """
    extra = {tag.lower() for tag in extra_hashtags if validate_hashtag(tag)}
    return {
        "hashtags": sorted(extract_hashtags(content) | extra),
        "tagged_users": extract_user_mentions(content),
        "tagged_pets": extract_pet_mentions(content),
    }
