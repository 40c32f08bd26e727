"""AssetForge — FastAPI Application.

This module is the single entry point for the web service.  It defines the
FastAPI ``app`` instance, the generation routes, the error handlers, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`~assetforge.core.config.config`
  (``ASSETFORGE_*`` environment variables and ``.env``).
- **Generation** is delegated to an
  :class:`~assetforge.core.orchestrator.AssetOrchestrator` created at startup
  and stored on ``app.state``.  Route handlers obtain it through the
  :func:`get_orchestrator` dependency, which tests override.
- **Persistence** uses a single ``assets.json`` file — no database required.
- **Errors** raised by the core are turned into
  ``{"success": false, "error": ...}`` bodies by the exception handlers below.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/api/generate-asset``       Generate one asset (201)
POST      ``/api/generate-batch``       Generate up to five assets
POST      ``/api/generate-variations``  Generate style variations
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    assetforge

Direct invocation::

    python -m assetforge.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assetforge import __version__
from assetforge.api.models import (
    AssetPayload,
    BatchResponse,
    ErrorResponse,
    GenerateAssetRequest,
    GenerateAssetResponse,
    GenerateBatchRequest,
    GenerateVariationsRequest,
    VariationResponse,
)
from assetforge.core.asset_store import JsonAssetStore
from assetforge.core.config import config
from assetforge.core.errors import GenerationError, PersistenceError, ValidationError
from assetforge.core.generation_client import HttpGenerationClient
from assetforge.core.orchestrator import AssetOrchestrator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — generation client and asset store setup/teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    On startup:
        Creates the HTTP generation client, the JSON asset store, and the
        orchestrator that ties them together, and stores the orchestrator on
        ``app.state``.

    On shutdown:
        Closes the generation client's connection pool.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    # --- Startup -----------------------------------------------------------
    client = HttpGenerationClient(config)
    store = JsonAssetStore(config.assets_db)
    app.state.orchestrator = AssetOrchestrator(client, store, config)
    logger.info("AssetOrchestrator initialised.")

    yield  # Application runs here.

    # --- Shutdown ----------------------------------------------------------
    await client.aclose()
    logger.info("Generation client closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="AssetForge",
    description="AI asset generation API with batch and style-variation support.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_orchestrator(request: Request) -> AssetOrchestrator:
    """Return the orchestrator created by :func:`lifespan`."""
    return request.app.state.orchestrator


# ---------------------------------------------------------------------------
# Error handlers.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message).model_dump(by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


@app.exception_handler(ValidationError)
async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    """Map request validation failures to 400."""
    return _error_response(400, str(exc))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map malformed request bodies to 400 instead of FastAPI's default 422."""
    errors = exc.errors()
    if not errors:
        return _error_response(400, "Invalid request")

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return _error_response(400, f"Invalid request: {location}: {first.get('msg')}")
    return _error_response(400, f"Invalid request: {first.get('msg')}")


@app.exception_handler(PersistenceError)
async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(f"Persistence failure on {request.url.path}: {exc}")
    return _error_response(500, str(exc))


@app.exception_handler(GenerationError)
async def handle_generation_error(request: Request, exc: GenerationError) -> JSONResponse:
    logger.error(f"Generation failure on {request.url.path}: {exc}")
    return _error_response(502, str(exc))


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/api")


@router.post("/generate-asset", status_code=201, response_model=GenerateAssetResponse)
async def generate_asset(
    req: GenerateAssetRequest,
    orchestrator: AssetOrchestrator = Depends(get_orchestrator),
) -> GenerateAssetResponse:
    """Generate a single asset.

    This endpoint:

    1. Validates the prompt length and wallet address.
    2. Requests the image and metadata concurrently.
    3. Saves the asset and returns it with generation insights.

    Args:
        req: Validated :class:`GenerateAssetRequest` payload.

    Returns:
        Envelope with ``success``, ``asset`` and ``generation``.
    """
    result = await orchestrator.generate_asset(
        req.prompt,
        req.wallet_address,
        style=req.style,
        quality=req.quality,
        asset_type=req.asset_type,
    )
    return GenerateAssetResponse(
        asset=AssetPayload.from_asset(result.asset),
        generation=result.generation,
    )


@router.post("/generate-batch", response_model=BatchResponse)
async def generate_batch(
    req: GenerateBatchRequest,
    orchestrator: AssetOrchestrator = Depends(get_orchestrator),
) -> BatchResponse:
    """Generate up to five assets, one per prompt.

    Item failures are reported in ``data.errors`` and never change the
    response status.

    Args:
        req: Validated :class:`GenerateBatchRequest` payload.

    Returns:
        Envelope with ``success`` and ``data`` (assets, errors, summary).
    """
    result = await orchestrator.generate_batch(
        req.prompts,
        req.wallet_address,
        styles=req.styles,
        quality=req.quality,
    )
    return BatchResponse(data=result)


@router.post("/generate-variations", response_model=VariationResponse)
async def generate_variations(
    req: GenerateVariationsRequest,
    orchestrator: AssetOrchestrator = Depends(get_orchestrator),
) -> VariationResponse:
    """Generate style variations of one base prompt.

    Args:
        req: Validated :class:`GenerateVariationsRequest` payload.

    Returns:
        Envelope with ``success`` and ``data`` (basePrompt, variations,
        errors, summary).
    """
    result = await orchestrator.generate_variations(
        req.base_prompt,
        req.wallet_address,
        variation_count=req.variation_count,
        styles=req.styles,
    )
    return VariationResponse(data=result)


app.include_router(router)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~assetforge.core.config.config`
    (``ASSETFORGE_SERVER_HOST``, ``ASSETFORGE_SERVER_PORT``,
    ``ASSETFORGE_LOG_LEVEL``).  Defaults to ``0.0.0.0:3001``.

    This function is registered as the ``assetforge`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "assetforge.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
