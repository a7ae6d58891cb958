"""
Hashtag and mention handling for post and comment bodies.

Text is split in a single left-to-right pass into literal runs and tokens:
``@pet:<word>`` (pet mention), ``@<word>`` (user mention) and ``#<word>``
(hashtag), where <word> is a run of word characters. The pet form is tried
first so a pet mention is never read as a user mention. Every operation here
is total: malformed input just produces fewer tokens.
"""
import html
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

# Alternation order gives the longest-match-first rule at a given position.
_TOKEN_RE = re.compile(r"@pet:(?P<pet>\w+)|@(?P<user>\w+)|#(?P<hashtag>\w+)")
_HASHTAG_RE = re.compile(r"\w+")
_NON_WORD_RE = re.compile(r"\W")


class TokenKind(str, Enum):
    hashtag = "hashtag"
    user_mention = "user_mention"
    pet_mention = "pet_mention"


_GROUP_KINDS = {
    "pet": TokenKind.pet_mention,
    "user": TokenKind.user_mention,
    "hashtag": TokenKind.hashtag,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str


@dataclass(frozen=True)
class Segment:
    """A slice of the source text. ``token`` is None for literal runs."""
    text: str
    token: Token | None = None


@dataclass(frozen=True)
class AnnotatedText:
    original_length: int
    segments: tuple[Segment, ...]

    @property
    def tokens(self) -> list[Token]:
        return [s.token for s in self.segments if s.token is not None]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)


@dataclass(frozen=True)
class LinkTemplate:
    hashtag: Callable[[str], str]
    user: Callable[[str], str]
    pet: Callable[[str], str]

    def apply(self, token: Token) -> str:
        if token.kind is TokenKind.hashtag:
            return self.hashtag(token.value)
        if token.kind is TokenKind.user_mention:
            return self.user(token.value)
        return self.pet(token.value)


def annotate(text: str) -> AnnotatedText:
    segments: list[Segment] = []
    pos = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() > pos:
            segments.append(Segment(text[pos:match.start()]))
        group = match.lastgroup
        segments.append(Segment(match.group(0), Token(_GROUP_KINDS[group], match.group(group))))
        pos = match.end()
    if pos < len(text):
        segments.append(Segment(text[pos:]))
    return AnnotatedText(original_length=len(text), segments=tuple(segments))


def _values(text: str, kind: TokenKind) -> list[str]:
    return [t.value for t in annotate(text).tokens if t.kind is kind]


def extract_hashtags(text: str) -> set[str]:
    """Lower-cased, de-duplicated hashtag values found in ``text``."""
    return {value.lower() for value in _values(text, TokenKind.hashtag)}


def extract_user_mentions(text: str) -> list[str]:
    """Mentioned usernames in order of first appearance, de-duplicated ignoring case."""
    seen: set[str] = set()
    result = []
    for value in _values(text, TokenKind.user_mention):
        if value.lower() not in seen:
            seen.add(value.lower())
            result.append(value)
    return result


def extract_pet_mentions(text: str) -> list[str]:
    """Mentioned pet ids in order of first appearance."""
    return list(dict.fromkeys(_values(text, TokenKind.pet_mention)))


def render(
    annotated: AnnotatedText,
    link_template: LinkTemplate,
    escape: Callable[[str], str] | None = None,
) -> str:
    """Replace each token with its link; literal runs go through ``escape`` if given."""
    parts = []
    for segment in annotated.segments:
        if segment.token is not None:
            parts.append(link_template.apply(segment.token))
        elif escape is not None:
            parts.append(escape(segment.text))
        else:
            parts.append(segment.text)
    return "".join(parts)


def html_link_template(
    hashtag_prefix: str = "/hashtag",
    user_prefix: str = "/user",
    pet_prefix: str = "/pet",
    css_class: str = "text-blue-500 hover:underline",
) -> LinkTemplate:
    def _anchor(prefix: str, marker: str) -> Callable[[str], str]:
        def link(value: str) -> str:
            return (
                f'<a href="{html.escape(prefix)}/{quote(value)}" class="{html.escape(css_class)}">'
                f"{marker}{html.escape(value)}</a>"
            )
        return link

    return LinkTemplate(
        hashtag=_anchor(hashtag_prefix, "#"),
        user=_anchor(user_prefix, "@"),
        pet=_anchor(pet_prefix, "@pet:"),
    )


def render_html(text: str, link_template: LinkTemplate | None = None) -> str:
    """HTML fragment for ``text`` with tokens linked and everything else escaped."""
    if not text:
        return ""
    return render(annotate(text), link_template or html_link_template(), escape=html.escape)


def validate_hashtag(candidate: str) -> bool:
    if not isinstance(candidate, str):
        return False
    return _HASHTAG_RE.fullmatch(candidate) is not None


def clean_hashtag_param(raw: str) -> str:
    """
    Reduce a user-supplied hashtag parameter to a single bare tag.

    A leading ``#`` is dropped, only the first of several ``#``-joined tags and
    the first whitespace-separated word are kept, and any other non-word
    character is removed: ``"#dog#cat"`` -> ``"dog"``, ``"a#b"`` -> ``"a"``,
    ``"pet-life now"`` -> ``"petlife"``. Returns ``""`` if nothing is left.
    """
    tag = raw or ""
    if tag.startswith("#"):
        tag = tag[1:]
    tag = tag.split("#", 1)[0]
    words = tag.split()
    tag = words[0] if words else ""
    return _NON_WORD_RE.sub("", tag)


def generate_preview_content(
    content: str,
    hashtags: Iterable[str] = (),
    tagged_users: Iterable[str] = (),
    tagged_pets: Iterable[str] = (),
    link_template: LinkTemplate | None = None,
) -> str:
    """
    Render a post preview, appending explicitly tagged hashtags, usernames and
    pet ids that the body does not already mention as a token. Hashtags and
    usernames compare ignoring case.
    """
    if not content:
        return ""

    present = extract_hashtags(content)
    users = {username.lower() for username in extract_user_mentions(content)}
    pets = set(extract_pet_mentions(content))

    preview = content
    for tag in hashtags:
        if tag.lower() not in present:
            preview += f" #{tag}"
    for username in tagged_users:
        if username.lower() not in users:
            preview += f" @{username}"
    for pet_id in tagged_pets:
        if pet_id not in pets:
            preview += f" @pet:{pet_id}"

    return render_html(preview, link_template)
