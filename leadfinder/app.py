import uuid

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from leadfinder.api.routes import leads_router
from leadfinder.config import settings
from leadfinder.core.logging import StructuredLogger, request_id_var
from leadfinder.services.leads.exceptions import LeadFinderError

ALLOW_METHODS = "GET,OPTIONS"
ALLOW_HEADERS = "Content-Type"

app = FastAPI(
    title=settings.app_name,
    description="Forklift dealer lead discovery and contact enrichment API",
    version="1.0.0",
    debug=settings.debug,
)


def _cors_headers(request: Request) -> dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
    if "*" in settings.cors_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    else:
        origin = request.headers.get("origin", "")
        if origin in settings.cors_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
    return headers


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag each request with an id, add CORS headers and answer every OPTIONS as a preflight."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    token = request_id_var.set(request_id)
    try:
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(_cors_headers(request))
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        request_id_var.reset(token)


# Include routers
app.include_router(leads_router)


@app.exception_handler(LeadFinderError)
async def lead_finder_exception_handler(request: Request, exc: LeadFinderError):
    """Render pipeline errors as {ok: false, message}."""
    if exc.status_code >= 500:
        StructuredLogger.error(
            "Lead finder error", path=request.url.path, error=exc.message
        )
    else:
        StructuredLogger.info(
            "Rejected request", path=request.url.path, error=exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "message": message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"ok": False, "message": str(exc) or "Internal server error"},
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
