"""End-to-end smoke test covering generation through publishing."""

import json

import responses

from seogen.config import Settings
from seogen.generate import generate_content
from seogen.models import ContentKind, GenerationRequest, PublicationTarget
from seogen.publish_wordpress import publish_to_wordpress


@responses.activate
def test_e2e_smoke_flow():
    """Run a smoke test that exercises the primary pipeline surfaces."""

    class StubCompletionClient:
        def __init__(self):
            self.prompts = []

        def complete(self, prompt: str, model: str, max_tokens: int):
            self.prompts.append(prompt)
            if prompt.startswith("Based on:"):
                return "soaker hose\nexpandable hose"
            if "Write page title" in prompt:
                return "Top Garden Hose Picks"
            return f"<h2>Section {len(self.prompts)}</h2><p>{model}</p>"

    settings = Settings(api_key="sk-test", article_model="gpt-4", short_model="gpt-3.5-turbo")
    request = GenerationRequest(
        keyword_name="garden hose",
        url="https://shop.example.com/hoses",
        requested_types=["keywordList", "pageTitle", "article"],
        content_kind=ContentKind.POST,
    )
    stub = StubCompletionClient()

    generated = generate_content(request, stub, settings)

    assert list(generated) == ["keywordList", "pageTitle", "article"]
    assert generated["article"].count("<h2>Section") == 4
    assert "<p>gpt-4</p>" in generated["article"]
    assert "soaker hose" in stub.prompts[3]

    responses.add(responses.GET, "https://wp.example.com/wp-json/wp/v2/posts", json=[], status=200)
    responses.add(
        responses.POST,
        "https://wp.example.com/wp-json/wp/v2/posts",
        json={"id": 42, "link": "https://wp.example.com/top-garden-hose-picks/", "status": "publish"},
        status=201,
    )

    result = publish_to_wordpress(
        PublicationTarget("https://wp.example.com", "tester", "secret"),
        generated,
        request.content_kind,
    )

    assert result.remote_id == 42
    assert result.canonical_link == "https://wp.example.com/top-garden-hose-picks/"
    recorded = json.loads(responses.calls[1].request.body)
    assert recorded["status"] == "publish"
    assert recorded["slug"] == "top-garden-hose-picks"
    assert recorded["title"] == "Top Garden Hose Picks"
    assert recorded["content"] == generated["article"]
