"""Article assembly - four chained completions merged into one HTML body"""

import logging

from .completion import CompletionClient
from .models import GenerationContext
from .prompts import ARTICLE_SECTIONS, build_article_prompt

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"


def assemble_article(context: GenerationContext, client: CompletionClient, model: str) -> str:
    """Generate the full article section by section

    Args:
        context: Generation context; keyword list and reference link are read
            as they stand when this is called
        client: Completion client
        model: Model id for every section

    Returns:
        HTML article, sections joined by a blank line
    """
    snapshot = context.snapshot()
    sections = []

    for section in range(1, len(ARTICLE_SECTIONS) + 1):
        spec = build_article_prompt(section, snapshot)
        logger.info(f"Generating article section {section}/{len(ARTICLE_SECTIONS)} for '{snapshot.keyword_name}'")
        sections.append(client.complete(spec.text, model, spec.max_tokens))

    article = SECTION_SEPARATOR.join(sections)
    logger.info(f"Article assembled: {len(article)} characters")
    return article
