"""Prompt templates and builders for each content-type tag.

Every style rule (length limits, banned words, banned characters) lives in the
prompt text itself. Nothing downstream checks the completion against them.
"""

from __future__ import annotations

from typing import NamedTuple

from .models import (
    KEYWORD_LIST,
    META_DESCRIPTION,
    META_TITLE,
    PAGE_TITLE,
    REFERENCE_LINK,
    GenerationContext,
)


class PromptSpec(NamedTuple):
    text: str
    max_tokens: int


DEFAULT_MAX_TOKENS = 100
ARTICLE_SECTION_MAX_TOKENS = 500

GENERIC_TEMPLATE = "Generate content for {keyword_name}"

KEYWORD_LIST_TEMPLATE = """Based on: {keyword_name} and {url}, create a list of top 20 high volume keywords matching the {keyword_name}/{url} separated by line with no numeration, numbers or special characters of the top sub-product categories without any intro's or explanations just the keywords.
Rule: No brackets in output, No titles just the keyword in output, No symbols in output
Format:
No symbols, numbers or brackets in output
"""

PAGE_TITLE_TEMPLATE = """Rules: Avoid using the word "needs";
IMPORTANT: Do not add | Company Name at the end;
No : in output;
No "" in output;
No ' in output;
No ! in output;
no - in output;
Do not mention blog in output;
Do not mention article in output;
Do not include colors in output;
Max 55 characters;
Follow Google Best Practices, do not keyword stuff, exclude how many in packs, and ensure meta titles are no more than 55 characters long.;
do not mention how many in packs;
Prompt:
Write page title starting with top or best {keyword_name}. Title could include some keywords from {keyword_list} relevant to the {keyword_name} in natural language, readable. total length of page title must be under 55 characters in total.
Format: {{output}}
"""

META_TITLE_TEMPLATE = """Rules: Avoid using the word "needs"; No "" in output; No ' in output; No ! in output;
Max 55 characters;
Do not write meta title in output;
Follow Google Best Practices, avoid the use of a comma in output, do not keyword stuff, and ensure meta titles are no more than 55 characters long;
Use variations to add appeal. Showcase popularity and recognition through Trending Now phrases;
Do not write CTA in output;
Prompt:
The meta title format should be: {page_title}, followed by the most pertinent part of the {keyword_list} with high-volume keywords that provide value based on features making customers want to learn more, with only one sentence. after a "-" or "|" it may include a short CTA like learn, top resource, or other informational CTA keep this highly variable focusing on click through rate of customers.
All structured around customer needs - we aim at higher click-through rates alongside enhanced engagement which aligns with Google's standards while keeping Call-To-Action repetition under 5%.
Meta Title: {{output}}
"""

META_DESCRIPTION_TEMPLATE = """Rule: No brackets in output
Max 155 characters, shorten if necessary;
Do not mention company name
Prompt: Write a meta description that incorporate actionable phrases and offer a distinct motivation for potential customers to read the article:{page_title}. Maintain a tone that echoes the brand's messaging. Refrain from using an overabundance of capital letters or punctuation that could be interpreted as intrusive or spam-like. Insert pertinent keywords naturally to align with SEO best practices while ensuring that the description is an accurate portrayal of the respective {page_title}.
Format {{output}}
"""

REFERENCE_LINK_TEMPLATE = """Rule: No brackets in output
Rules:
only one href link, nothing else in output;
Do not add title, just the raw link;
Prompt:
write the link to a relevant wikipedia article about {keyword_name} to be used as an external link
Format: {{Output}}
"""

TAG_TEMPLATES = {
    KEYWORD_LIST: (KEYWORD_LIST_TEMPLATE, 150),
    PAGE_TITLE: (PAGE_TITLE_TEMPLATE, 20),
    META_TITLE: (META_TITLE_TEMPLATE, 30),
    META_DESCRIPTION: (META_DESCRIPTION_TEMPLATE, 60),
    REFERENCE_LINK: (REFERENCE_LINK_TEMPLATE, 60),
}

_ARTICLE_RULES = """Rule: no "[]" or "{{}}" in output;
Do not use "offerings" in output;
Rule: Do not use "needs" in output;
Rule: DO NOT use ":" in titles, use "-" instead;
Rule: Include proper HTML formatting;
"""

ARTICLE_SECTION_1 = """Rule: No "[]" or "{{}}" in output.
Rule: Do not use the word "offerings" in the output.
Rule: Do not use the word "needs" in the output.
Rule: DO NOT use ":" in titles, use "-" instead.
Rule: Include proper HTML formatting.
Rule: Write in a readable format with clear paragraphs.
Rule: Do not create lists unless explicitly instructed.

Prompt:

<p>Explain why the client should buy/use {keyword_name} in the first paragraph. Write confidently in a Wikipedia style, naming the segment of clients who would benefit most from this product/service without asking questions. Explain why it's the best choice, providing clear reasons and avoiding generic statements like "it's a good choice."</p>

<p>Write a minimum 350-word paragraph about {keyword_name}, highlighting its unique value proposition. Use at least 5 high-volume keywords relevant to someone looking to buy {keyword_name}. Ensure the text is clickbait but without special characters.</p>

<h2>{keyword_name} Top Features</h2>
<ul>
  <li>Feature 1</li>
  <li>Feature 2</li>
  <li>Feature 3</li>
</ul>

<a class="action tocart primary" href="{url}" target="_blank" data-link-type="default" data-element="link" data-pb-style="RQGFH2A" alt="Learn more about {keyword_name} and related products">
  <span data-element="link_text">Learn more about {keyword_name}</span>
</a><br>

<h2>What is {keyword_name}</h2>
<p>Write an informational, direct paragraph about {keyword_name}, referencing {reference_url} without mentioning Wikipedia. The href alt tag should explain the link content in under 50 characters. Write a 400-word Wikipedia-style description.</p>

<h3>Different Uses for {keyword_name}</h3>
<ul>
  <li>Use 1</li>
  <li>Use 2</li>
  <li>Use 3</li>
</ul>

<h2>Top {keyword_name}</h2>
<p>Explain the value {keyword_name} provides to different customer segments.</p>

<h2>{keyword_name} Benefits</h2>
<p>List the benefits of {keyword_name}. Include a <ul> list highlighting important features for various use cases.</p>
"""

ARTICLE_SECTION_2 = _ARTICLE_RULES + """Rule: Repeat all <h3> until you have written about every keyword in {keyword_list} list, skipping "other" content
Prompt:
<h2>{keyword_list} name variation</h2>
<p>Aiming EAT (Expertise, Authoritativeness, Trustworthiness) guidelines & Google's Natural Language Algorithm without saying that, write an informational paragraph in the style of Wikipedia minimum 200 words. Explain why this {keyword_name} would present benefits to a customer.</p>
(Repeat for all {keyword_list})
<h3>{keyword_list} xx (choose a keyword from {keyword_list})</h3>
<p>Write a summary of {keyword_list} xx with minimum 150 characters also describing {keyword_name}.</p>
<h3>{keyword_list} xx (choose a keyword from {keyword_list})</h3>
<p>Write a summary of {keyword_list} xx with minimum 150 characters also describing {keyword_name}</p>
"""

ARTICLE_SECTION_3 = _ARTICLE_RULES + """Prompt:
<h2><b>New {keyword_name} {{Innovations {{Use variations of this title and write it different every time but make sure its talking about the {keyword_name} and its category of products/services}}</b></h2>
<p>Write a paragraph informational of what new things are happening and changing for {keyword_name} in depth and how its changed and is changing with a <ul> list of changes of at least 3, and what's said to be coming, explaining each technical, informational detail. Go into detail on each innovation as an expert.</p>
<h2>{{{keyword_name} name variation}}</h2>
<p>{{Aiming EAT (Expertise, Authoritativeness, Trustworthiness) guidelines & Google's Natural Language Algorithm without saying that, write an informational paragraph in the style of Wikipedia minimum 200 words. Explain why this {keyword_name} would present benefits to a customer.}}</p>
RULE FOR NEXT PROMPT: {{Repeat for all [keywords]}}
<h3>{keyword_list} (choose a keyword from {keyword_list})</h3>
<p>Write a summary of the keyword you have selected in the h3 title with minimum 150 characters also describing {keyword_name}.</p>
<h3>{keyword_list} (choose a keyword from {keyword_list})</h3>
<p>Write a summary of the keyword you have selected in the h3 title with minimum 150 characters also describing {keyword_name}</p>
<h2><b>[keyword name{{s}}] For Sale</b></h2>
<h3> {keyword_name} {{Category}}</h3>
<p>summary of {keyword_name} sub category by writing a 50-word paragraph explaining what the product is and whichever other relevant info</p>
<h2>{keyword_name} Reviews</h2> <p>Always write an informational 150-word paragraph about {keyword_name} Reviews</p> Write a list of the top type of good reviews this product/service receives and why<ul><li></li></ul>
<h2> Trending {keyword_name}</h2>
<p> Write an informational but direct paragraph what values the {keyword_name} provides and who it benefits the most.</p>
"""

ARTICLE_SECTION_4 = _ARTICLE_RULES + """Prompt:
<h2> What to look for {{in/with/etc}} {keyword_name}</h2>
<p> Write an informational but direct paragraph what values the {keyword_name} provides and who it benefits the most. Talk about space, mobility, price, value, features and then add who segment most benefits from this product.</p>
<h2>Top {keyword_name} Financing Options</h2>
<p>Write about what some of the top financed products from this {keyword_name} In one concise paragraph write a wikipedia style paragraph why customers would use financing, as a financing expert give the customer the expert values on why to finance the product and the low rates and saving money by doing so. Do not include financing for non-equipment type products, then talk about larger orders, ordering bulk and the values on sustainability by doing so.</p>
<a class="action tocart primary" href="[Finance Link]" target="_blank" data-link-type="default" data-element="link" data-pb-style="RQGFH2A" alt="[Product name {{simplify name to brand and sku}} Financing]"><span data-element="link_text">Finance {keyword_name} Products</span></a><br>
<h2>{keyword_name} FAQ</h2>
<p>{{Answer questions about what is a {keyword_name} FAQ in a short informational paragraph always mentioning the with max 100 words}} regarding the {keyword_name}, and features based on {keyword_name}</p>
Write questions and answers to the top questions related to the [category] and [Product name] in form of snippet questions and longtail keywords asked with high-volume keywords and phrases written in following format: <h3></h3> <p></p>
"""

ARTICLE_SECTIONS = (ARTICLE_SECTION_1, ARTICLE_SECTION_2, ARTICLE_SECTION_3, ARTICLE_SECTION_4)


def render_prompt(template: str, **values: str) -> str:
    """Render a prompt template with safe defaults for missing data."""
    safe_values = {
        key: "" if value is None else str(value)
        for key, value in values.items()
    }
    return template.format(**safe_values)


def _context_values(context: GenerationContext) -> dict:
    return {
        "keyword_name": context.keyword_name,
        "url": context.url,
        "keyword_list": context.keyword_list,
        "page_title": context.page_title,
        "reference_url": context.reference_url,
    }


def build_prompt(tag: str, context: GenerationContext) -> PromptSpec:
    """Build the prompt and token budget for a short-field tag.

    Args:
        tag: Content-type tag (e.g. "pageTitle"). Unknown tags get a generic prompt.
        context: Values generated so far in the current run.

    Returns:
        PromptSpec with the rendered prompt text and max output tokens.
    """
    template, max_tokens = TAG_TEMPLATES.get(tag, (GENERIC_TEMPLATE, DEFAULT_MAX_TOKENS))
    return PromptSpec(render_prompt(template, **_context_values(context)), max_tokens)


def build_article_prompt(section: int, context: GenerationContext) -> PromptSpec:
    """Build the prompt for article section 1-4."""
    if section < 1 or section > len(ARTICLE_SECTIONS):
        raise ValueError(f"Article section must be 1-{len(ARTICLE_SECTIONS)}, got {section}")
    template = ARTICLE_SECTIONS[section - 1]
    return PromptSpec(render_prompt(template, **_context_values(context)), ARTICLE_SECTION_MAX_TOKENS)
