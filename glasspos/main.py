from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import settings
from .database import engine, Base
from .exceptions import ConfigurationError, CatalogError, PricingError
from .routers import beveling_rates, calculations, glass_types, operations

logger = logging.getLogger("glasspos")

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="GlassPOS",
    description="Point-of-sale pricing for glass cutting and edge finishing",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(operations.router, prefix="/api")
app.include_router(beveling_rates.router, prefix="/api")
app.include_router(glass_types.router, prefix="/api")
app.include_router(calculations.router, prefix="/api")


# --- Core errors -> HTTP ---

@app.exception_handler(PricingError)
def pricing_error_handler(request: Request, exc: PricingError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


@app.exception_handler(CatalogError)
def catalog_error_handler(request: Request, exc: CatalogError):
    logger.warning("Catalog lookup failed on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=404, content={"detail": exc.to_dict()})


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.warning("Rejected rate configuration on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=409, content={"detail": exc.to_dict()})


@app.get("/health")
def health():
    return {"status": "ok", "app": "glasspos", "company": settings.COMPANY_NAME}


@app.on_event("startup")
def auto_seed():
    """Seed default beveling tiers and glass types into empty tables."""
    if not settings.SEED_DEFAULTS:
        return
    from .database import SessionLocal
    from .providers import seed_beveling_rates, seed_glass_types
    db = SessionLocal()
    try:
        tiers = seed_beveling_rates(db)
        glass = seed_glass_types(db)
        logger.info("Seeded %d beveling tiers and %d glass types", tiers, glass)
    finally:
        db.close()
