import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dealership import __version__
from dealership.api.api import api_router
from dealership.core.config import settings
from dealership.core.exceptions import register_exception_handlers
from dealership.core.middleware import add_middleware

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Back-office API for vehicle listings, their images and customer inquiries",
    version=__version__,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
)

# Access gate first so CORS wraps it and 401 responses still carry CORS headers
add_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    """Root endpoint with basic service information."""
    return {
        "message": f"Welcome to the {settings.PROJECT_NAME} API",
        "version": __version__,
        "docs_url": f"{settings.API_PREFIX}/docs",
    }

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    if not settings.CLOUDINARY_CLOUD_NAME:
        logger.warning("CLOUDINARY_CLOUD_NAME is not set; image uploads will fail")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dealership.main:app", host="0.0.0.0", port=8000, reload=True)
