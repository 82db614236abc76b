"""Content generation orchestrator.

Tags are processed strictly in request order. Keyword list, page title and
reference link results are written to the context before the next tag runs,
so an article requested before the keyword list does not see it.
"""

import logging
from typing import Optional

from .article import assemble_article
from .audit_log import AuditLogWriter, build_audit_row
from .completion import CompletionClient
from .config import Settings
from .errors import GenerationError
from .models import (
    ARTICLE,
    KEYWORD_LIST,
    PAGE_TITLE,
    REFERENCE_LINK,
    GeneratedContent,
    GenerationContext,
    GenerationRequest,
)
from .prompts import build_prompt

logger = logging.getLogger(__name__)

# Tag -> context field updated once the tag completes
CONTEXT_FIELDS = {
    KEYWORD_LIST: "keyword_list",
    PAGE_TITLE: "page_title",
    REFERENCE_LINK: "reference_url",
}


def generate_tag(
    tag: str,
    context: GenerationContext,
    client: CompletionClient,
    settings: Settings,
) -> str:
    """Generate the text for one tag and fold it into the context."""
    if tag == ARTICLE:
        text = assemble_article(context, client, settings.article_model)
    else:
        spec = build_prompt(tag, context)
        text = client.complete(spec.text, settings.short_model, spec.max_tokens)

    field = CONTEXT_FIELDS.get(tag)
    if field:
        setattr(context, field, text)
    return text


def generate_content(
    request: GenerationRequest,
    client: CompletionClient,
    settings: Settings,
    audit_writer: Optional[AuditLogWriter] = None,
) -> GeneratedContent:
    """Generate every requested content type for one keyword

    Args:
        request: Validated generation request
        client: Completion client
        settings: Model selection
        audit_writer: Receives one row per successful run, in the background

    Returns:
        Mapping of tag to generated text, in request order

    Raises:
        GenerationError: Any tag failed. Nothing is returned for the other tags.
    """
    context = GenerationContext.for_request(request)
    generated: GeneratedContent = {}
    total = len(request.requested_types)

    for index, tag in enumerate(request.requested_types, 1):
        logger.info(f"Processing {tag} ({index}/{total}) for '{request.keyword_name}'")
        try:
            generated[tag] = generate_tag(tag, context, client, settings)
        except Exception as e:
            logger.error(f"Generation failed at {tag} for '{request.keyword_name}': {e}", exc_info=True)
            raise GenerationError(tag=tag) from e
        logger.info(f"Completed {tag}: {len(generated[tag])} characters")

    if audit_writer is not None:
        row = build_audit_row(request.keyword_name, request.url, generated)
        try:
            audit_writer.submit(row)
        except Exception as e:
            logger.error(f"Failed to schedule audit row: {e}")

    return generated
