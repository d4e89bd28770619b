from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.logging import logger
from .core.responses import UTF8JSONResponse
from .db.base import Base
from .db.session import engine
from .db import models  # noqa: F401  (registers tables on Base.metadata)
from .api import volunteers, address

if settings.auto_create_db:
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("AUTO_CREATE_DB enabled: tables created via metadata.")
    except Exception as e:
        logger.error(f"Error creating database tables with AUTO_CREATE_DB: {e}")
        raise

# Create FastAPI app
app = FastAPI(
    title="Cadastro de Voluntários",
    description="Cadastro de voluntários com busca de endereço por CEP",
    version="1.0.0",
    default_response_class=UTF8JSONResponse,
)

allowed_origins = (
    [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    if settings.cors_origins
    else ["*"]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(volunteers.router, prefix="/volunteers", tags=["volunteers"])
app.include_router(address.router, tags=["address"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    logger.info("Starting volunteer registry...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Database: {settings.database_url}")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event."""
    logger.info("Shutting down volunteer registry...")
