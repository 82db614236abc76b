"""Request-scoped data types shared by the generation and publishing modules"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from .errors import ValidationError

# Content-type tags, as sent by the dashboard
KEYWORD_LIST = "keywordList"
PAGE_TITLE = "pageTitle"
META_TITLE = "metaTitle"
META_DESCRIPTION = "metaDescription"
REFERENCE_LINK = "urlWiki"
ARTICLE = "article"

KNOWN_TAGS = (KEYWORD_LIST, PAGE_TITLE, META_TITLE, META_DESCRIPTION, REFERENCE_LINK, ARTICLE)

GeneratedContent = Dict[str, str]


class ContentKind(str, Enum):
    """WordPress content collection targeted by a publish call"""

    POST = "post"
    PAGE = "page"

    @property
    def collection(self) -> str:
        return "pages" if self is ContentKind.PAGE else "posts"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContentKind":
        """Anything other than 'page' publishes as a post."""
        if isinstance(value, cls):
            return value
        return cls.PAGE if (value or "").strip().lower() == "page" else cls.POST


@dataclass(frozen=True)
class GenerationRequest:
    keyword_name: str
    url: str
    requested_types: List[str]
    content_kind: ContentKind = ContentKind.POST

    def __post_init__(self):
        if not self.keyword_name or not self.url or not self.requested_types:
            raise ValidationError("Missing required fields")
        # Preserve request order while dropping repeated tags
        object.__setattr__(self, "requested_types", list(dict.fromkeys(self.requested_types)))


@dataclass
class GenerationContext:
    """Accumulator for one generation run.

    Fields are filled in as their tags complete and read by later prompts.
    """

    keyword_name: str
    url: str
    keyword_list: str = ""
    page_title: str = ""
    reference_url: str = ""

    @classmethod
    def for_request(cls, request: GenerationRequest) -> "GenerationContext":
        return cls(keyword_name=request.keyword_name, url=request.url)

    def snapshot(self) -> "GenerationContext":
        return replace(self)


@dataclass(frozen=True)
class PublicationTarget:
    base_url: str
    username: str
    credential_secret: str

    def is_complete(self) -> bool:
        return bool(self.base_url and self.username and self.credential_secret)


@dataclass(frozen=True)
class PublicationResult:
    remote_id: int
    canonical_link: str
    was_update: bool
