"""
Tests for the FastAPI endpoints.

The app state is configured with mock-mode settings before the TestClient
starts, so the lifespan never reads the environment and no completion
request leaves the process.
"""

from unittest.mock import MagicMock, patch

import pytest
import responses
from fastapi.testclient import TestClient

from seogen.api import app, state
from seogen.config import Settings
from seogen.errors import ProviderError, PublicationError, ValidationError
from seogen.models import ContentKind, PublicationResult

WORDPRESS = {"url": "https://wp.example.com", "username": "tester", "appPassword": "secret"}


@pytest.fixture
def client():
    state.configure(Settings(llm_provider="openai", api_key=None))
    state.audit_writer = MagicMock()
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    state.settings = None
    state.client = None
    state.audit_writer = None


def test_root_banner(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.text


def test_api_test_route(client):
    response = client.get("/api/test")

    assert response.json() == {"message": "API is working!"}


def test_generate_in_mock_mode(client):
    """Mock mode returns placeholder text for every requested tag"""
    response = client.post("/api/generate-multiple-content", json={
        "keywordName": "garden hose",
        "url": "https://x.test",
        "generate": ["keywordList", "pageTitle"],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert list(body["generatedContent"]) == ["keywordList", "pageTitle"]
    for text in body["generatedContent"].values():
        assert text.startswith('Mocked response for prompt: "')
    assert "garden hose" in body["generatedContent"]["keywordList"]
    state.audit_writer.submit.assert_called_once()


@pytest.mark.parametrize("payload", [
    {"keywordName": "garden hose", "url": "https://x.test", "generate": []},
    {"url": "https://x.test", "generate": ["pageTitle"]},
    {"keywordName": "garden hose", "generate": ["pageTitle"]},
    {"keywordName": "garden hose", "url": "https://x.test"},
])
def test_generate_missing_fields(client, payload):
    response = client.post("/api/generate-multiple-content", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required fields"}


def test_generate_malformed_body(client):
    response = client.post("/api/generate-multiple-content", json={
        "keywordName": "garden hose", "url": "https://x.test", "generate": "pageTitle",
    })

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_generate_failure_is_generic(client):
    """Provider failures become a generic 500 without partial content"""
    state.client = MagicMock()
    state.client.complete.side_effect = ["KW", ProviderError("secret upstream detail")]

    response = client.post("/api/generate-multiple-content", json={
        "keywordName": "garden hose",
        "url": "https://x.test",
        "generate": ["keywordList", "pageTitle"],
    })

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to generate content"}
    state.audit_writer.submit.assert_not_called()


@patch("seogen.api.publish_to_wordpress")
def test_publish_created(mock_publish, client):
    mock_publish.return_value = PublicationResult(remote_id=42, canonical_link="https://wp.example.com/p/", was_update=False)

    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"pageTitle": "Top Hoses", "article": "<p>Body</p>"},
        "contentType": "post",
    })

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "wordpressPostId": 42,
        "link": "https://wp.example.com/p/",
        "message": "Post created successfully",
    }
    target, content, kind = mock_publish.call_args[0]
    assert target.base_url == "https://wp.example.com"
    assert target.credential_secret == "secret"
    assert content == {"pageTitle": "Top Hoses", "article": "<p>Body</p>"}
    assert kind is ContentKind.POST


@patch("seogen.api.publish_to_wordpress")
def test_publish_page_updated(mock_publish, client):
    mock_publish.return_value = PublicationResult(remote_id=7, canonical_link="https://wp.example.com/q/", was_update=True)

    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"article": "<p>Body</p>"},
        "contentType": "page",
    })

    assert response.json()["message"] == "Page updated successfully"
    assert mock_publish.call_args[0][2] is ContentKind.PAGE


def test_publish_missing_credentials(client):
    """Validation errors return 400 without touching WordPress"""
    with patch("seogen.publish_wordpress.requests") as mock_requests:
        response = client.post("/api/publish-to-wordpress", json={
            "wordpress": {"url": "https://wp.example.com", "username": "tester"},
            "generatedContent": {"article": "<p>Body</p>"},
        })

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing WordPress credentials"}
    mock_requests.get.assert_not_called()
    mock_requests.post.assert_not_called()


def test_publish_missing_article(client):
    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"pageTitle": "Top Hoses"},
    })

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No content provided for publishing"}


@patch("seogen.api.publish_to_wordpress")
def test_publish_failure_reports_upstream_message(mock_publish, client):
    mock_publish.side_effect = PublicationError("Sorry, you are not allowed to do that.")

    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"article": "<p>Body</p>"},
    })

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Sorry, you are not allowed to do that."}


@patch("seogen.api.publish_to_wordpress", side_effect=ValidationError("No content provided for publishing"))
def test_publish_validation_error_maps_to_400(mock_publish, client):
    response = client.post("/api/publish-to-wordpress", json={"wordpress": WORDPRESS, "generatedContent": {}})

    assert response.status_code == 400


@responses.activate
def test_publish_malformed_wordpress_reply_returns_json_error(client):
    """A 2xx WordPress reply without id/link still yields the JSON error shape"""
    responses.add(responses.GET, "https://wp.example.com/wp-json/wp/v2/posts", json=[], status=200)
    responses.add(responses.POST, "https://wp.example.com/wp-json/wp/v2/posts", json={"code": "ok"}, status=201)

    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"pageTitle": "Top Hoses", "article": "<p>Body</p>"},
    })

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to publish post to WordPress"}


@patch("seogen.api.publish_to_wordpress", side_effect=RuntimeError("boom"))
def test_publish_unexpected_error_returns_json_error(mock_publish, client):
    response = client.post("/api/publish-to-wordpress", json={
        "wordpress": WORDPRESS,
        "generatedContent": {"article": "<p>Body</p>"},
        "contentType": "page",
    })

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to publish page to WordPress"}
