"""WordPress publishing module"""

import base64
import logging
import re
from typing import Any, Dict, Mapping, Optional

import requests

from .errors import PublicationError, ValidationError
from .models import ARTICLE, PAGE_TITLE, ContentKind, PublicationResult, PublicationTarget

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "generated-post"
REQUEST_TIMEOUT = 30

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_HYPHENS_RE = re.compile(r"-{2,}")


def slugify_title(title: Optional[str]) -> str:
    """Lowercase the title, drop punctuation and join words with hyphens."""
    slug = _SLUG_STRIP_RE.sub("", (title or "").lower())
    slug = _HYPHENS_RE.sub("-", _WHITESPACE_RE.sub("-", slug.strip())).strip("-")
    return slug or DEFAULT_SLUG


def _error_message(error: requests.exceptions.RequestException, default: str) -> str:
    """Prefer the WordPress error message from the response body."""
    response = getattr(error, "response", None)
    if response is None:
        return default
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return default


class WordPressPublisher:
    """WordPress REST API client for one posts or pages collection"""

    def __init__(
        self,
        site_url: str,
        username: str,
        app_password: str,
        content_kind: ContentKind = ContentKind.POST,
    ):
        """Initialize WordPress publisher

        Args:
            site_url: WordPress site URL (e.g., https://example.com)
            username: WordPress username
            app_password: WordPress application password
            content_kind: Post or page collection
        """
        self.site_url = site_url.rstrip('/')
        self.content_kind = content_kind
        self.api_url = f"{self.site_url}/wp-json/wp/v2/{content_kind.collection}"
        self.username = username
        self.app_password = app_password

        # Create basic auth token
        credentials = f"{username}:{app_password}"
        token = base64.b64encode(credentials.encode()).decode()
        self.headers = {
            "Authorization": f"Basic {token}",
            "Content-Type": "application/json"
        }

    def find_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        """Return the existing item with this slug, or None"""
        response = requests.get(
            self.api_url,
            headers=self.headers,
            params={"slug": slug},
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        items = response.json()
        return items[0] if items else None

    def update(self, item_id: int, title: str, content: str) -> Dict[str, Any]:
        response = requests.post(
            f"{self.api_url}/{item_id}",
            headers=self.headers,
            json={"title": title, "content": content, "status": "publish"},
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        return response.json()

    def create(self, title: str, content: str, slug: str) -> Dict[str, Any]:
        response = requests.post(
            self.api_url,
            headers=self.headers,
            json={"title": title, "content": content, "slug": slug, "status": "publish"},
            timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        return response.json()

    def upsert(self, title: Optional[str], content: str) -> PublicationResult:
        """Create or update the item whose slug derives from the title

        Args:
            title: Generated page title, may be empty
            content: Article HTML

        Returns:
            PublicationResult with remote ID, link and which path was taken
        """
        slug = slugify_title(title)
        kind = self.content_kind.value
        default_message = f"Failed to publish {kind} to WordPress"

        try:
            existing = self.find_by_slug(slug)
            if existing:
                logger.info(f"Updating WordPress {kind} {existing['id']} (slug={slug})")
                result = self.update(existing["id"], title or "Updated Post", content)
            else:
                logger.info(f"Creating WordPress {kind} (slug={slug})")
                result = self.create(title or "New Post", content, slug)

            publication = PublicationResult(
                remote_id=result["id"],
                canonical_link=result["link"],
                was_update=bool(existing),
            )

        except requests.exceptions.RequestException as e:
            logger.error(f"{default_message}: {e}")
            if hasattr(e, 'response') and e.response is not None:
                logger.error(f"Response: {e.response.text}")
            raise PublicationError(_error_message(e, default_message)) from e

        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"{default_message}: unexpected response ({e!r})")
            raise PublicationError(default_message) from e

        logger.info(f"{kind.capitalize()} {'updated' if existing else 'created'}: "
                    f"ID={publication.remote_id}, URL={publication.canonical_link}")
        return publication


def publish_to_wordpress(
    target: PublicationTarget,
    generated_content: Mapping[str, str],
    content_kind: ContentKind = ContentKind.POST,
) -> PublicationResult:
    """Publish the generated article, updating any item with the same slug

    Args:
        target: WordPress site and credentials
        generated_content: Generated fields; "article" is required
        content_kind: Post or page

    Returns:
        PublicationResult

    Raises:
        ValidationError: Credentials or article missing (no request is made)
        PublicationError: WordPress rejected the request or was unreachable
    """
    if target is None or not target.is_complete():
        raise ValidationError("Missing WordPress credentials")

    article = (generated_content or {}).get(ARTICLE)
    if not article:
        raise ValidationError("No content provided for publishing")

    publisher = WordPressPublisher(
        target.base_url,
        target.username,
        target.credential_secret,
        content_kind=ContentKind.parse(content_kind),
    )
    return publisher.upsert(generated_content.get(PAGE_TITLE), article)
