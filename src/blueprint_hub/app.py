"""FastAPI application with lifespan, blueprint, build and admin endpoints."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from blueprint_hub.cache import BlueprintCache, create_blueprint_cache
from blueprint_hub.config import get_settings
from blueprint_hub.cost import estimate_savings
from blueprint_hub.errors import (
    BlueprintGenerationError,
    InvalidPromptError,
    TemplateNotFoundError,
    WorkspaceBuildError,
)
from blueprint_hub.llm import create_gemini_client, generate_blueprint
from blueprint_hub.logging_config import configure_logging
from blueprint_hub.models.blueprint import Blueprint
from blueprint_hub.models.template import TemplateMetadata
from blueprint_hub.notion import WorkspaceBuilder, build_many, build_workspace, create_notion_client
from blueprint_hub.notion.models import BatchBuildItem, BuildFailure
from blueprint_hub.pipeline import Generate, resolve_blueprint
from blueprint_hub.templates import TemplateRegistry, preload_cache, sample_blueprint

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and wire services on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.cache = create_blueprint_cache(settings)
    app.state.registry = TemplateRegistry()
    app.state.gemini_client = None
    app.state.builder = None
    if settings.notion_admin_token:
        app.state.builder = WorkspaceBuilder(create_notion_client(settings.notion_admin_token))
    logger.info(
        "Blueprint hub started",
        extra={"cache_backend": settings.cache_backend, "environment": settings.environment},
    )
    yield
    await app.state.cache.drain()
    await app.state.cache.store.close()


app = FastAPI(
    title="Blueprint Hub",
    lifespan=lifespan,
)


# --- Request / response bodies ---


class BlueprintRequest(BaseModel):
    prompt: str


class BlueprintResponse(BaseModel):
    success: bool
    blueprint: Blueprint
    cached: bool
    cache_id: str | None = None
    similarity: float | None = None


class BuildRequest(BaseModel):
    blueprint: Blueprint
    cache_id: str | None = None


class BuildResponse(BaseModel):
    success: bool
    page_id: str
    notion_url: str
    duplicate_link: str
    failures: list[BuildFailure] = []


class BatchBuildRequest(BaseModel):
    template_ids: list[str]


class BatchBuildResponse(BaseModel):
    success: bool
    results: list[BatchBuildItem]


# --- Dependencies ---


def get_cache(request: Request) -> BlueprintCache:
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise HTTPException(status_code=503, detail="Cache not initialized")
    return cache


def get_registry(request: Request) -> TemplateRegistry:
    return getattr(request.app.state, "registry", None) or TemplateRegistry()


def get_builder(request: Request) -> WorkspaceBuilder:
    """Return the Notion builder, or 503 when the admin workspace is not configured."""
    settings = get_settings()
    builder = getattr(request.app.state, "builder", None)
    if builder is None or not settings.notion_gallery_page_id:
        raise HTTPException(status_code=503, detail="Notion admin workspace not configured")
    return builder


def get_generate(request: Request) -> Generate:
    """Return a prompt -> Blueprint callable backed by Gemini.

    The Gemini client is created on first use so the app can start (and
    serve cached blueprints) without an API key.
    """

    async def generate(prompt: str) -> Blueprint:
        client = getattr(request.app.state, "gemini_client", None)
        if client is None:
            api_key = get_settings().gemini_api_key
            if not api_key:
                raise BlueprintGenerationError("generation failed: Gemini API key not configured")
            client = create_gemini_client(api_key)
            request.app.state.gemini_client = client
        blueprint, _cost = await generate_blueprint(client, prompt)
        return blueprint

    return generate


async def verify_admin(request: Request) -> None:
    """Verify the admin secret header for protected endpoints.

    Compares the X-Admin-Secret header against the configured secret.
    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    settings = get_settings()
    secret = request.headers.get("X-Admin-Secret", "")
    if not settings.admin_secret or secret != settings.admin_secret:
        raise HTTPException(status_code=403, detail="Invalid admin secret")


# --- Endpoints ---


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "blueprint-hub",
        "version": "0.1.0",
    }


@app.post("/blueprint", response_model=BlueprintResponse)
async def blueprint_endpoint(
    body: BlueprintRequest,
    cache: BlueprintCache = Depends(get_cache),
    generate: Generate = Depends(get_generate),
):
    """Resolve a prompt to a blueprint, from cache when possible."""
    try:
        resolution = await resolve_blueprint(body.prompt, cache, generate)
    except InvalidPromptError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except BlueprintGenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return BlueprintResponse(
        success=True,
        blueprint=resolution.blueprint,
        cached=resolution.cached,
        cache_id=resolution.cache_id,
        similarity=resolution.similarity,
    )


@app.post("/build", response_model=BuildResponse)
async def build_endpoint(
    body: BuildRequest,
    builder: WorkspaceBuilder = Depends(get_builder),
    cache: BlueprintCache = Depends(get_cache),
):
    """Build a blueprint into the admin workspace and return its duplicate link."""
    settings = get_settings()
    try:
        result = await build_workspace(
            builder,
            body.blueprint,
            settings.notion_gallery_page_id,
            cache=cache,
            cache_id=body.cache_id,
        )
    except WorkspaceBuildError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return BuildResponse(
        success=True,
        page_id=result.root_page_id,
        notion_url=result.notion_url,
        duplicate_link=result.duplicate_link,
        failures=result.failures,
    )


@app.get("/admin/cache")
async def cache_analytics_endpoint(
    _: None = Depends(verify_admin),
    cache: BlueprintCache = Depends(get_cache),
):
    """Cache usage analytics plus the estimated generation spend saved."""
    analytics = await cache.get_cache_analytics()
    if analytics is None:
        raise HTTPException(status_code=503, detail="Cache analytics unavailable")
    return {
        "success": True,
        "analytics": analytics.model_dump(),
        "savings": estimate_savings(analytics.total_hits, analytics.total_cached),
    }


@app.post("/admin/cache/init")
async def cache_init_endpoint(
    _: None = Depends(verify_admin),
    cache: BlueprintCache = Depends(get_cache),
    registry: TemplateRegistry = Depends(get_registry),
):
    """Pre-load the cache with every curated template prompt."""
    stats = await preload_cache(cache, registry)
    return {"success": True, "stats": stats.model_dump()}


@app.get("/admin/templates", response_model=list[TemplateMetadata])
async def templates_endpoint(
    category: str = "all",
    _: None = Depends(verify_admin),
    registry: TemplateRegistry = Depends(get_registry),
):
    """List curated templates, optionally filtered by category."""
    return registry.by_category(category)


@app.post("/admin/templates/build", response_model=BatchBuildResponse)
async def templates_build_endpoint(
    body: BatchBuildRequest,
    _: None = Depends(verify_admin),
    builder: WorkspaceBuilder = Depends(get_builder),
    registry: TemplateRegistry = Depends(get_registry),
):
    """Build the requested curated templates one after another."""
    if not body.template_ids:
        raise HTTPException(status_code=400, detail="template_ids must not be empty")

    settings = get_settings()
    try:
        templates = [registry.find_by_id(tid) for tid in body.template_ids]
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    results = await build_many(
        builder,
        [(t.id, sample_blueprint(t)) for t in templates],
        settings.notion_gallery_page_id,
        delay_seconds=settings.build_delay_seconds,
    )
    return BatchBuildResponse(success=True, results=results)
