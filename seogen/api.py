"""
seogen API Server
=================

HTTP endpoints used by the content dashboard: generate SEO content for a
keyword and publish the result to WordPress.

Run directly:
    python main.py serve
    uvicorn seogen.api:app --host 0.0.0.0 --port 4000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from .audit_log import AuditLogWriter
from .completion import CompletionClient
from .config import Settings, load_config
from .errors import GenerationError, PublicationError, ValidationError
from .generate import generate_content
from .models import ContentKind, GenerationRequest, PublicationTarget
from .publish_wordpress import publish_to_wordpress

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

# Fields are optional; the routes reject missing values with a 400

class GenerateReq(BaseModel):
    keywordName: Optional[str] = None
    url: Optional[str] = None
    generate: Optional[List[str]] = None
    contentType: Optional[str] = None


class WordPressCredentials(BaseModel):
    url: Optional[str] = None
    username: Optional[str] = None
    appPassword: Optional[str] = None


class PublishReq(BaseModel):
    wordpress: Optional[WordPressCredentials] = None
    generatedContent: Optional[Dict[str, Optional[str]]] = None
    contentType: Optional[str] = None


# ---------------------------------------------------------------------------
# Application state
# ---------------------------------------------------------------------------


class AppState:
    """Shared, read-only after startup."""

    def __init__(self) -> None:
        self.settings: Optional[Settings] = None
        self.client: Optional[CompletionClient] = None
        self.audit_writer: Optional[AuditLogWriter] = None

    def configure(self, settings: Settings) -> None:
        self.settings = settings
        self.client = CompletionClient.from_settings(settings)
        self.audit_writer = AuditLogWriter(
            settings.google_sheet_id,
            settings.google_service_account_path,
            sheet_range=settings.google_sheet_range,
        )


state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if state.settings is None:
        state.configure(load_config())
    logger.info("seogen API ready (provider=%s, mock=%s)",
                state.settings.llm_provider, state.client.mock)
    yield
    if state.audit_writer is not None:
        state.audit_writer.close()
    logger.info("seogen API stopped")


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/api")


@router.get("/test")
def api_test():
    return {"message": "API is working!"}


@router.post("/generate-multiple-content")
def generate_multiple_content(req: GenerateReq):
    """Generate every requested content type for one keyword."""
    try:
        request = GenerationRequest(
            keyword_name=req.keywordName,
            url=req.url,
            requested_types=req.generate or [],
            content_kind=ContentKind.parse(req.contentType),
        )
    except ValidationError as e:
        return _failure(400, str(e))

    try:
        generated = generate_content(request, state.client, state.settings, state.audit_writer)
    except GenerationError as e:
        return _failure(500, str(e))
    except Exception as e:
        logger.error(f"Unexpected error generating content: {e}", exc_info=True)
        return _failure(500, "Failed to generate content")

    return {"success": True, "generatedContent": generated}


@router.post("/publish-to-wordpress")
def publish(req: PublishReq):
    """Create or update the generated article on a WordPress site."""
    creds = req.wordpress or WordPressCredentials()
    target = PublicationTarget(
        base_url=creds.url or "",
        username=creds.username or "",
        credential_secret=creds.appPassword or "",
    )
    kind = ContentKind.parse(req.contentType)
    content = {key: value for key, value in (req.generatedContent or {}).items() if value is not None}

    try:
        result = publish_to_wordpress(target, content, kind)
    except ValidationError as e:
        return _failure(400, str(e))
    except PublicationError as e:
        return _failure(500, str(e))
    except Exception as e:
        logger.error(f"Unexpected error publishing {kind.value}: {e}", exc_info=True)
        return _failure(500, f"Failed to publish {kind.value} to WordPress")

    action = "updated" if result.was_update else "created"
    return {
        "success": True,
        "wordpressPostId": result.remote_id,
        "link": result.canonical_link,
        "message": f"{kind.value.capitalize()} {action} successfully",
    }


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="seogen API",
    description="SEO content generation and WordPress publishing.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(_request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected request body: {exc.errors()}")
    return _failure(400, "Invalid request body")


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Content Generator Backend is running"


app.include_router(router)
