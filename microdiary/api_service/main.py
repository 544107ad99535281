import logging
from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from microdiary.api_service.core.database import init_db
from microdiary.api_service.core.settings import settings
from microdiary.api_service.api_v1.endpoints import entries, day, export, system

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up MicroDiary API Service...")
    try:
        await init_db()
        logger.info("Database initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down MicroDiary API Service...")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Single-user time-use diary: log activities, check them against the rest of the day, and export your history.",
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create API v1 router
api_v1_router = APIRouter(prefix=settings.API_V1_STR)

# Include all endpoint routers
api_v1_router.include_router(entries.router, prefix="/entries", tags=["Entries"])
api_v1_router.include_router(day.router, prefix="/day", tags=["Daily Data"])
api_v1_router.include_router(export.router, prefix="/export", tags=["Export"])
api_v1_router.include_router(system.router, prefix="/system", tags=["System"])

# Include the v1 router in the main app
app.include_router(api_v1_router)

# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": "Welcome to the MicroDiary API Service",
        "version": settings.APP_VERSION,
        "docs": f"{settings.API_V1_STR}/docs"
    }

# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy", "service": "microdiary-api"}

if __name__ == "__main__":
    import uvicorn
    logger.info("Starting Uvicorn server for development...")
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
