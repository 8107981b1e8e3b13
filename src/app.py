"""Review Registry FastAPI application.

Processes registry commands synchronously via HTTP. Each request under
/registry runs inside the review_registry domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from review_registry.domain import registry
from review_registry.utils.logging import configure_logging

configure_logging()
registry.init()

app = FastAPI(
    title="Review Registry API",
    description="Purchase-verified reviews with per-business rating summaries",
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the registry domain context for registry requests."""
    if request.url.path.startswith("/registry"):
        with registry.domain_context():
            return await call_next(request)
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from review_registry.api import registry_router  # noqa: E402

app.include_router(registry_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": registry.name}})
