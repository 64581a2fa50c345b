"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from certfactory.api.dependencies import get_config, get_config_path
from certfactory.api.routes import certificates
from certfactory.utils.logger import setup_logger

# Load configuration
config = get_config()

# Setup logging
setup_logger(config)
logger = logging.getLogger("certfactory")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan event handler."""
    # Startup
    logger.info(f"Starting {config.app.title} v{config.app.version}")
    logger.info(f"Configuration file: {get_config_path()}")

    yield

    # Shutdown
    logger.info(f"Shutting down {config.app.title}")


# Create FastAPI app
app = FastAPI(
    title=config.app.title,
    version=config.app.version,
    debug=config.app.debug,
    description="""
    **Certificate Factory** - issue X.509 certificates from declarative requests.

    ## Features
    - Self-signed root CAs and certificates chained to a supplied CA record
    - Subject alternative names (DNS, email, IP, URI)
    - Key usage and extended key usage flags
    - CRL distribution point and OCSP responder URLs
    - Records are returned to the caller; nothing is stored server-side
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Include API routers
app.include_router(certificates.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": config.app.version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="localhost", port=8000, reload=config.app.debug)
