# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from app import config
from app.repositories import DuplicateError
from app.routers import auth, blogs, products, reservations, showcase, uploads, users

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger("app")

app = FastAPI(title=f"{config.SITE_NAME} API")

# =============================================================================
# Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    # empty allow-list: reflect any origin (credentials need a concrete origin)
    allow_origins=config.CORS_ORIGINS,
    allow_origin_regex=None if config.CORS_ORIGINS else ".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=500)


# =============================================================================
# Error handlers
# =============================================================================
def _describe(errors) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse({"detail": _describe(exc.errors())}, status_code=400)


@app.exception_handler(DuplicateError)
async def handle_duplicate(request: Request, exc: DuplicateError):
    return JSONResponse({"detail": "Duplicate value"}, status_code=409)


@app.exception_handler(reservations.HoneypotTripped)
async def handle_honeypot(request: Request, exc: reservations.HoneypotTripped):
    return JSONResponse({"message": "Accepted"}, status_code=202)


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


# =============================================================================
# Routes
# =============================================================================
@app.get("/healthz")
def healthz():
    return {"ok": True}


for router in (
    auth.router,
    users.router,
    blogs.router,
    blogs.public_router,
    products.categories_router,
    products.products_router,
    showcase.landing_menu_router,
    showcase.marquee_images_router,
    showcase.marquee_slides_router,
    reservations.router,
    uploads.router,
):
    app.include_router(router, prefix=config.API_BASE)
